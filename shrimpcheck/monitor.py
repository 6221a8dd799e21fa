from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence

from shrimpcheck.alerts import (
	AlertEvent,
	AlertSettings,
	AsyncioScheduler,
	AudioAction,
	DebouncedAlert,
	NotificationArbiter,
	Scheduler,
)
from shrimpcheck.config import AppConfig
from shrimpcheck.hand_overlap import hands_in_face
from shrimpcheck.landmarks.face_oval import simplify_face
from shrimpcheck.landmarks.types import HolisticFrame, SimplifiedContour
from shrimpcheck.posture import (
	ClassificationResult,
	PostureStatus,
	ReferencePosture,
	classify,
	posture_status,
)

POSTURE_CHANNEL = "posture"
HAND_CHANNEL = "hand"


@dataclass(frozen=True)
class MonitorSettings:
	"""Settings snapshot; read fresh on every frame."""

	enabled: bool = True
	posture: AlertSettings = field(default_factory=lambda: AlertSettings(True, 10.0, 1.0))
	hand: AlertSettings = field(default_factory=lambda: AlertSettings(True, 1.0, 0.25))

	@classmethod
	def from_config(cls, cfg: AppConfig) -> "MonitorSettings":
		return cls(
			enabled=cfg.enabled,
			posture=AlertSettings(cfg.posture.enabled, cfg.posture.timeout_seconds, cfg.posture.volume),
			hand=AlertSettings(cfg.hand.enabled, cfg.hand.timeout_seconds, cfg.hand.volume),
		)

	def effective(self, channel: AlertSettings) -> AlertSettings:
		if self.enabled:
			return channel
		return replace(channel, enabled=False)


@dataclass(frozen=True)
class FrameResult:
	contour: Optional[SimplifiedContour]
	classification: ClassificationResult
	status: PostureStatus
	hand_overlap: bool
	events: List[AlertEvent] = field(default_factory=list)


class PostureMonitor:
	"""
	Frame-driven pipeline: face oval -> posture classification and hand
	overlap -> two debounced alert channels -> one arbitrated audio output.

	Every alert event (including ones fired later by a timer) goes to
	`on_event`; merged play/pause commands go to `on_audio`.
	"""

	def __init__(
		self,
		scheduler: Optional[Scheduler] = None,
		clock: Callable[[], float] = time.monotonic,
		on_event: Optional[Callable[[AlertEvent], None]] = None,
		on_audio: Optional[Callable[[AudioAction], None]] = None,
		logger: Optional[Callable[[str], None]] = None,
	) -> None:
		scheduler = scheduler or AsyncioScheduler()
		self.logger: Callable[[str], None] = logger or (lambda _msg: None)
		self._on_event: Callable[[AlertEvent], None] = on_event or (lambda _ev: None)
		self.arbiter = NotificationArbiter(on_audio)
		self.posture_alert = DebouncedAlert(POSTURE_CHANNEL, scheduler, clock, self._dispatch, self.logger)
		self.hand_alert = DebouncedAlert(HAND_CHANNEL, scheduler, clock, self._dispatch, self.logger)

		self.last_contour: Optional[SimplifiedContour] = None
		self.last_status: Optional[PostureStatus] = None
		self.last_hand_overlap = False

	def _dispatch(self, event: AlertEvent) -> None:
		self.arbiter(event)
		self._on_event(event)

	def process_frame(
		self,
		frame: HolisticFrame,
		references: Sequence[ReferencePosture],
		settings: MonitorSettings,
	) -> FrameResult:
		contour = simplify_face(frame.face)
		result = classify(contour, references)
		status = posture_status(result, references)
		overlap = hands_in_face(contour, frame.left_hand, frame.right_hand)

		if status != self.last_status:
			self.logger(f"[Posture] {status.value} (best={result.best_index})")
		if overlap and not self.last_hand_overlap:
			self.logger("[Posture] hand in the face")

		events: List[AlertEvent] = []
		events += self.posture_alert.update(status is PostureStatus.BAD, settings.effective(settings.posture))
		events += self.hand_alert.update(overlap, settings.effective(settings.hand))

		self.last_contour = contour
		self.last_status = status
		self.last_hand_overlap = overlap
		return FrameResult(
			contour=contour,
			classification=result,
			status=status,
			hand_overlap=overlap,
			events=events,
		)

	def close(self) -> List[AlertEvent]:
		return self.posture_alert.reset() + self.hand_alert.reset()
