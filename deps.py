"""
FastAPI dependencies. Use Depends(get_state) in route handlers to receive AppState.
"""
from fastapi import HTTPException, Request

from app_state import AppState
from shrimpcheck.monitor import PostureMonitor


def get_state(request: Request) -> AppState:
	"""Return the app state instance attached in lifespan."""
	return request.app.state.state


def get_monitor(request: Request) -> PostureMonitor:
	monitor = get_state(request).monitor
	if monitor is None:
		raise HTTPException(status_code=503, detail="Monitor not running")
	return monitor
