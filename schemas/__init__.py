"""Pydantic request/response models for API validation and docs."""
from schemas.requests import (
	AlertSettingsPayload,
	CapturePayload,
	FramePayload,
	LandmarkPayload,
	SettingsPayload,
)
from schemas.responses import CaptureResponse, FrameResponse

__all__ = [
	"AlertSettingsPayload",
	"CapturePayload",
	"FramePayload",
	"LandmarkPayload",
	"SettingsPayload",
	"CaptureResponse",
	"FrameResponse",
]
