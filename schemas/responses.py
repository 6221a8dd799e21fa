"""Pydantic response models for API docs (optional; routes may return dicts)."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class FrameResponse(BaseModel):
	"""Response from POST /api/frame."""

	status: str
	reason: str
	best_index: Optional[int] = None
	hand_overlap: bool
	face_present: bool
	events: List[Dict[str, Any]] = []


class CaptureResponse(BaseModel):
	"""Response from POST /api/postures/capture."""

	detail: str
	index: int
	count: int
