"""Reference posture API. Routes: /api/postures, /api/postures/capture, /api/postures/clear."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from app_state import AppState
from deps import get_monitor, get_state
from schemas.requests import CapturePayload
from schemas.responses import CaptureResponse
from shrimpcheck.monitor import PostureMonitor

logger = logging.getLogger(__name__)
router = APIRouter(tags=["api_postures"])


@router.get("/api/postures")
async def list_postures_endpoint(st: AppState = Depends(get_state)):
	"""List captured reference postures in classification order."""
	return {
		"postures": [
			{
				"index": i,
				"label": ref.label.value,
				"contour": [{"x": p.x, "y": p.y, "z": p.z} for p in ref.contour],
			}
			for i, ref in enumerate(st.references.snapshot())
		]
	}


@router.post("/api/postures/capture", response_model=CaptureResponse)
async def capture_posture_endpoint(
	payload: CapturePayload,
	st: AppState = Depends(get_state),
	monitor: PostureMonitor = Depends(get_monitor),
):
	"""Store the most recently observed face contour as a reference posture."""
	ref = st.references.capture(monitor.last_contour, payload.correct)
	if ref is None:
		raise HTTPException(status_code=409, detail="No face in the last frame; nothing to capture")
	count = len(st.references)
	logger.info("[Postures] captured %s reference #%d", ref.label.value, count - 1)
	return CaptureResponse(detail="Reference posture captured", index=count - 1, count=count)


@router.post("/api/postures/clear")
async def clear_postures_endpoint(st: AppState = Depends(get_state)):
	"""Remove all reference postures."""
	st.references.clear()
	logger.info("[Postures] cleared")
	return {"detail": "Reference postures cleared", "count": 0}
