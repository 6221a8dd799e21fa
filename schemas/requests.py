"""Pydantic request body models for the frame, posture and settings endpoints."""
from typing import List, Optional

from pydantic import BaseModel, Field


class LandmarkPayload(BaseModel):
	"""One normalized tracker point."""

	x: float
	y: float
	z: float = 0.0


class FramePayload(BaseModel):
	"""Request body for POST /api/frame. Any landmark set may be omitted when not tracked."""

	face: Optional[List[LandmarkPayload]] = Field(None, description="Full face mesh (468 points)")
	left_hand: Optional[List[LandmarkPayload]] = Field(None, description="Left hand (21 points)")
	right_hand: Optional[List[LandmarkPayload]] = Field(None, description="Right hand (21 points)")
	pose: Optional[List[LandmarkPayload]] = Field(None, description="Body pose; passed through, unused by the core")
	t_host: Optional[float] = Field(None, description="Host timestamp (epoch seconds)")


class CapturePayload(BaseModel):
	"""Request body for POST /api/postures/capture."""

	correct: bool = Field(..., description="True for a good reference posture, False for a bad one")


class AlertSettingsPayload(BaseModel):
	enabled: Optional[bool] = None
	timeout_seconds: Optional[float] = Field(None, gt=0, description="Seconds before the alert fires")
	volume: Optional[float] = Field(None, ge=0, le=1)


class SettingsPayload(BaseModel):
	"""Request body for PUT /api/settings. Omitted fields keep their current value."""

	enabled: Optional[bool] = Field(None, description="Master on/off switch")
	posture: Optional[AlertSettingsPayload] = None
	hand: Optional[AlertSettingsPayload] = None
	audio_url: Optional[str] = Field(None, min_length=1, description="Sound played while an alert is firing")
