"""
Explicit app state – single source of truth for runtime lifecycle.
Created in lifespan, attached to app.state.state; injected into routes via Depends(get_state).
"""
from typing import Any, Callable, Dict, Optional

from shrimpcheck.config import AppConfig
from shrimpcheck.monitor import MonitorSettings, PostureMonitor
from shrimpcheck.references import ReferenceStore


class AppState:
	"""
	Holds all runtime state for the app. Only touched from the event loop
	(route handlers and timer callbacks), so nothing here is locked.
	"""
	# Config and live settings (settings are replaced, never mutated)
	cfg: Optional[AppConfig] = None
	settings: MonitorSettings
	audio_url: str = ""

	# Pipeline (set in lifespan)
	monitor: Optional[PostureMonitor] = None
	references: ReferenceStore

	# WebSocket broadcast (set in lifespan)
	manager: Any = None
	log_to_clients: Optional[Callable[[str], None]] = None

	# Debug counters
	dbg: Dict[str, Any]

	def __init__(self) -> None:
		self.settings = MonitorSettings()
		self.references = ReferenceStore()
		self.dbg = {
			"frames": 0,
			"frames_absent": 0,
			"alert_events": 0,
			"last_frame_t": None,
		}
