import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_state import AppState
from routers import api_frame, api_postures, api_settings, ws
from routers.ws import manager
from shrimpcheck.alerts import AlertEvent, AsyncioScheduler, AudioAction
from shrimpcheck.config import AppConfig, get_config
from shrimpcheck.monitor import MonitorSettings, PostureMonitor

logger = logging.getLogger("shrimpcheck.server")


def _log_to_clients(message: str) -> None:
	"""
	Send a log line to the server log and all connected WebSocket clients.
	Fire-and-forget; safe to call from non-async code.
	"""
	logger.info(message)
	manager.broadcast_nowait({"type": "log", "msg": message})


def build_state(cfg: AppConfig) -> AppState:
	st = AppState()
	st.cfg = cfg
	st.settings = MonitorSettings.from_config(cfg)
	st.audio_url = cfg.audio.url
	st.manager = manager
	st.log_to_clients = _log_to_clients

	def _on_event(ev: AlertEvent) -> None:
		st.dbg["alert_events"] += 1
		manager.broadcast_nowait({"type": "alert", **ev.to_dict()})

	def _on_audio(action: AudioAction) -> None:
		manager.broadcast_nowait({"type": "audio", "url": st.audio_url, **action.to_dict()})

	st.monitor = PostureMonitor(
		scheduler=AsyncioScheduler(),
		on_event=_on_event,
		on_audio=_on_audio,
		logger=_log_to_clients,
	)
	return st


@asynccontextmanager
async def lifespan(app: FastAPI):
	cfg = get_config()
	st = build_state(cfg)
	app.state.state = st
	logger.info(
		"[Server] posture timeout=%.1fs hand timeout=%.1fs frame_rate=%d",
		cfg.posture.timeout_seconds,
		cfg.hand.timeout_seconds,
		cfg.capture.frame_rate,
	)
	try:
		yield
	finally:
		# Pending timers live on this loop; cancel them before it goes away.
		if st.monitor is not None:
			st.monitor.close()
		st.monitor = None


app = FastAPI(lifespan=lifespan)
app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)
app.include_router(ws.router)
app.include_router(api_frame.router)
app.include_router(api_postures.router)
app.include_router(api_settings.router)


def main() -> None:
	import uvicorn

	logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
	cfg = get_config()
	uvicorn.run(app, host=cfg.server.host, port=int(cfg.server.port))


if __name__ == "__main__":
	main()
