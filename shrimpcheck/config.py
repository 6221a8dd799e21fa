from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_URL = "https://upload.wikimedia.org/wikipedia/commons/b/b6/IMSLP348253-PMLP01555-Mozart_29-1.ogg"


@dataclass(frozen=True)
class AlertConfig:
	enabled: bool = True
	# Seconds the condition must hold before the alert fires.
	timeout_seconds: float = 10.0
	# Playback volume requested from the audio sink [0..1].
	volume: float = 1.0


@dataclass(frozen=True)
class AudioConfig:
	url: str = DEFAULT_AUDIO_URL


@dataclass(frozen=True)
class CaptureConfig:
	# Frames per second requested from the camera / tracker collaborator.
	frame_rate: int = 5


@dataclass(frozen=True)
class ServerConfig:
	host: str = "127.0.0.1"
	port: int = 8000


@dataclass(frozen=True)
class AppConfig:
	# Master on/off switch for all alerts.
	enabled: bool = True
	posture: AlertConfig = field(default_factory=AlertConfig)
	hand: AlertConfig = field(default_factory=lambda: AlertConfig(timeout_seconds=1.0, volume=0.25))
	audio: AudioConfig = field(default_factory=AudioConfig)
	capture: CaptureConfig = field(default_factory=CaptureConfig)
	server: ServerConfig = field(default_factory=ServerConfig)


_CONFIG_PATH: Optional[Path] = None
_CONFIG_CACHE: Optional[AppConfig] = None


def _repo_root() -> Path:
	# shrimpcheck/config.py -> repo root is one level up.
	return Path(__file__).resolve().parents[1]


def get_default_config_path() -> Path:
	return _repo_root() / "config.json"


def set_config_path(path: str | Path) -> None:
	"""
	Override the config path (must be called before first get_config()).
	Intended for tooling and tests; the server normally uses the default path.
	"""
	global _CONFIG_PATH
	global _CONFIG_CACHE
	_CONFIG_PATH = Path(path).expanduser().resolve()
	_CONFIG_CACHE = None


def _deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
	cur: Any = d
	for k in keys:
		if not isinstance(cur, dict):
			return default
		cur = cur.get(k)
	return cur if cur is not None else default


def _as_int(v: Any, default: int) -> int:
	try:
		return int(v)
	except (TypeError, ValueError):
		return int(default)


def _as_bool(v: Any, default: bool) -> bool:
	if isinstance(v, bool):
		return v
	if isinstance(v, (int, float)):
		return bool(v)
	if isinstance(v, str):
		return v.strip().lower() in ("1", "true", "yes", "on")
	return bool(default)


def _as_str(v: Any, default: str = "") -> str:
	return str(v) if v is not None else str(default)


def _as_float(v: Any, default: float) -> float:
	try:
		return float(v)
	except (TypeError, ValueError):
		return float(default)


def _parse_alert_cfg(obj: Any, defaults: AlertConfig) -> AlertConfig:
	if not isinstance(obj, dict):
		return defaults
	timeout = _as_float(obj.get("timeout_seconds"), defaults.timeout_seconds)
	volume = _as_float(obj.get("volume"), defaults.volume)
	return AlertConfig(
		enabled=_as_bool(obj.get("enabled"), defaults.enabled),
		timeout_seconds=timeout if timeout > 0.0 else defaults.timeout_seconds,
		volume=min(1.0, max(0.0, volume)),
	)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
	p = Path(path).expanduser().resolve() if path else (_CONFIG_PATH or get_default_config_path())
	if not p.exists():
		# Defaults-only config; app can still run.
		return AppConfig()
	try:
		raw = json.loads(p.read_text(encoding="utf-8"))
	except (OSError, ValueError) as e:
		# If config is malformed, fail safe to defaults (but keep app running).
		logger.warning("[Config] ignoring %s: %s", p, e)
		return AppConfig()

	if not isinstance(raw, dict):
		return AppConfig()

	defaults = AppConfig()
	enabled = _as_bool(_deep_get(raw, ["enabled"], True), True)

	audio_url = _as_str(_deep_get(raw, ["audio", "url"], DEFAULT_AUDIO_URL), DEFAULT_AUDIO_URL).strip()

	frame_rate = _as_int(_deep_get(raw, ["capture", "frame_rate"], 5), 5)

	host = _as_str(_deep_get(raw, ["server", "host"], "127.0.0.1"), "127.0.0.1")
	port = _as_int(_deep_get(raw, ["server", "port"], 8000), 8000)

	return AppConfig(
		enabled=enabled,
		posture=_parse_alert_cfg(_deep_get(raw, ["posture"], {}), defaults.posture),
		hand=_parse_alert_cfg(_deep_get(raw, ["hand"], {}), defaults.hand),
		audio=AudioConfig(url=audio_url or DEFAULT_AUDIO_URL),
		capture=CaptureConfig(frame_rate=frame_rate if frame_rate > 0 else 5),
		server=ServerConfig(host=host, port=port if port > 0 else 8000),
	)


def get_config() -> AppConfig:
	global _CONFIG_CACHE
	if _CONFIG_CACHE is None:
		_CONFIG_CACHE = load_config()
	return _CONFIG_CACHE
