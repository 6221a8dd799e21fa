"""Alert settings API. Routes: /api/settings."""
from dataclasses import replace
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from app_state import AppState
from deps import get_state
from schemas.requests import AlertSettingsPayload, SettingsPayload
from shrimpcheck.alerts import AlertSettings

router = APIRouter(tags=["api_settings"])


def _alert_to_dict(s: AlertSettings) -> Dict[str, Any]:
	return {"enabled": s.enabled, "timeout_seconds": s.timeout_seconds, "volume": s.volume}


def _merge_alert(current: AlertSettings, patch: Optional[AlertSettingsPayload]) -> AlertSettings:
	if patch is None:
		return current
	return AlertSettings(
		enabled=current.enabled if patch.enabled is None else bool(patch.enabled),
		timeout_seconds=current.timeout_seconds if patch.timeout_seconds is None else float(patch.timeout_seconds),
		volume=current.volume if patch.volume is None else float(patch.volume),
	)


def settings_to_dict(st: AppState) -> Dict[str, Any]:
	return {
		"enabled": st.settings.enabled,
		"posture": _alert_to_dict(st.settings.posture),
		"hand": _alert_to_dict(st.settings.hand),
		"audio_url": st.audio_url,
	}


@router.get("/api/settings")
async def get_settings_endpoint(st: AppState = Depends(get_state)):
	"""Current alert settings."""
	return settings_to_dict(st)


@router.put("/api/settings")
async def update_settings_endpoint(payload: SettingsPayload, st: AppState = Depends(get_state)):
	"""Patch alert settings. They take effect from the next frame."""
	st.settings = replace(
		st.settings,
		enabled=st.settings.enabled if payload.enabled is None else bool(payload.enabled),
		posture=_merge_alert(st.settings.posture, payload.posture),
		hand=_merge_alert(st.settings.hand, payload.hand),
	)
	if payload.audio_url is not None:
		st.audio_url = payload.audio_url.strip() or st.audio_url
	return settings_to_dict(st)
