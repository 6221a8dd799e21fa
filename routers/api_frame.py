"""Frame ingestion and status. Routes: /api/frame, /api/status."""
import time

from fastapi import APIRouter, Depends

from app_state import AppState
from deps import get_monitor, get_state
from schemas.requests import FramePayload
from schemas.responses import FrameResponse
from shrimpcheck.landmarks.types import HolisticFrame, to_landmark_set
from shrimpcheck.monitor import PostureMonitor

router = APIRouter(tags=["api_frame"])


def payload_to_frame(payload: FramePayload) -> HolisticFrame:
	return HolisticFrame(
		backend="http",
		t_host=payload.t_host,
		face=to_landmark_set(payload.face),
		left_hand=to_landmark_set(payload.left_hand),
		right_hand=to_landmark_set(payload.right_hand),
		pose=to_landmark_set(payload.pose),
	)


@router.post("/api/frame", response_model=FrameResponse)
async def process_frame_endpoint(
	payload: FramePayload,
	st: AppState = Depends(get_state),
	monitor: PostureMonitor = Depends(get_monitor),
):
	"""Run one classification pass over the landmarks of a single frame."""
	result = monitor.process_frame(payload_to_frame(payload), st.references.snapshot(), st.settings)
	st.dbg["frames"] += 1
	if result.contour is None:
		st.dbg["frames_absent"] += 1
	st.dbg["last_frame_t"] = float(payload.t_host if payload.t_host is not None else time.time())
	return FrameResponse(
		status=result.status.value,
		reason=result.classification.reason.value,
		best_index=result.classification.best_index,
		hand_overlap=result.hand_overlap,
		face_present=result.contour is not None,
		events=[ev.to_dict() for ev in result.events],
	)


@router.get("/api/status")
async def status_endpoint(
	st: AppState = Depends(get_state),
	monitor: PostureMonitor = Depends(get_monitor),
):
	"""Current posture status and alert channel phases."""
	return {
		"status": monitor.last_status.value if monitor.last_status else None,
		"hand_overlap": monitor.last_hand_overlap,
		"alerts": {
			monitor.posture_alert.channel: monitor.posture_alert.phase.value,
			monitor.hand_alert.channel: monitor.hand_alert.phase.value,
		},
		"audio_playing": monitor.arbiter.playing,
		"references": len(st.references),
		"debug": dict(st.dbg),
	}
