"""
Debounced alert channels.

Each channel runs the same small state machine:

    IDLE --active--> ARMED --timeout--> FIRING
      ^                |                  |
      +---inactive-----+----inactive------+

Timers are one-shot and cancellable; they are scheduled on an injected
scheduler (the asyncio event loop in the server, a manual clock in tests).
Channels never look at each other. They only share the notification sink,
where `NotificationArbiter` merges them into one play/pause output.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Set


logger = logging.getLogger(__name__)


class AlertPhase(str, Enum):
	IDLE = "idle"
	ARMED = "armed"
	FIRING = "firing"


class AlertTransition(str, Enum):
	ARMED = "armed"
	DISARMED = "disarmed"
	START = "start"
	STOP = "stop"


@dataclass(frozen=True)
class AlertSettings:
	enabled: bool = True
	timeout_seconds: float = 10.0
	volume: float = 1.0


@dataclass(frozen=True)
class AlertEvent:
	channel: str
	transition: AlertTransition
	phase: AlertPhase
	t: float
	volume: float = 1.0

	def to_dict(self) -> dict:
		return {
			"channel": self.channel,
			"transition": self.transition.value,
			"phase": self.phase.value,
			"t": self.t,
			"volume": self.volume,
		}


class TimerHandle(Protocol):
	def cancel(self) -> Any: ...


class Scheduler(Protocol):
	def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
	"""Schedules on the given loop, or on the running loop at call time."""

	def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
		self._loop = loop

	def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
		loop = self._loop or asyncio.get_running_loop()
		return loop.call_later(max(0.0, float(delay)), callback)


EventSink = Callable[[AlertEvent], None]


class DebouncedAlert:
	"""
	One alert channel. Call `update` once per frame with the current value of
	the watched condition and a fresh settings snapshot.

	Events produced synchronously are returned from `update` and also sent to
	`sink`; the timeout's START event is only sent to `sink`.
	"""

	def __init__(
		self,
		channel: str,
		scheduler: Scheduler,
		clock: Callable[[], float] = time.monotonic,
		sink: Optional[EventSink] = None,
		log: Optional[Callable[[str], None]] = None,
	) -> None:
		self.channel = channel
		self._scheduler = scheduler
		self._clock = clock
		self._sink: EventSink = sink or (lambda _ev: None)
		self._log: Callable[[str], None] = log or (lambda _msg: None)

		self._phase = AlertPhase.IDLE
		self._started_at: Optional[float] = None
		self._volume = 1.0
		self._timer: Optional[TimerHandle] = None
		# Bumped on every cancel so a stale callback can tell it lost the race.
		self._generation = 0

	@property
	def phase(self) -> AlertPhase:
		return self._phase

	@property
	def started_at(self) -> Optional[float]:
		return self._started_at

	@property
	def timer_pending(self) -> bool:
		return self._timer is not None

	def update(self, active: bool, settings: AlertSettings) -> List[AlertEvent]:
		if not settings.enabled:
			return self.reset()

		if active:
			if self._phase is not AlertPhase.IDLE:
				return []
			return [self._arm(settings)]

		if self._phase is AlertPhase.ARMED:
			self._cancel_timer()
			self._phase = AlertPhase.IDLE
			self._started_at = None
			return [self._emit(AlertTransition.DISARMED)]
		if self._phase is AlertPhase.FIRING:
			self._phase = AlertPhase.IDLE
			self._started_at = None
			return [self._emit(AlertTransition.STOP)]
		return []

	def reset(self) -> List[AlertEvent]:
		"""Drop back to IDLE, stopping the notification if it is playing."""
		self._cancel_timer()
		was = self._phase
		self._phase = AlertPhase.IDLE
		self._started_at = None
		if was is AlertPhase.FIRING:
			return [self._emit(AlertTransition.STOP)]
		if was is AlertPhase.ARMED:
			return [self._emit(AlertTransition.DISARMED)]
		return []

	def _arm(self, settings: AlertSettings) -> AlertEvent:
		self._phase = AlertPhase.ARMED
		self._started_at = self._clock()
		self._volume = float(settings.volume)
		generation = self._generation
		self._timer = self._scheduler.call_later(
			float(settings.timeout_seconds),
			lambda: self._on_timeout(generation),
		)
		return self._emit(AlertTransition.ARMED)

	def _on_timeout(self, generation: int) -> None:
		if generation != self._generation or self._phase is not AlertPhase.ARMED:
			logger.debug("[Alert] %s: stale timeout ignored", self.channel)
			return
		self._timer = None
		self._phase = AlertPhase.FIRING
		self._emit(AlertTransition.START)

	def _cancel_timer(self) -> None:
		self._generation += 1
		if self._timer is not None:
			self._timer.cancel()
			self._timer = None

	def _emit(self, transition: AlertTransition) -> AlertEvent:
		ev = AlertEvent(
			channel=self.channel,
			transition=transition,
			phase=self._phase,
			t=self._clock(),
			volume=self._volume,
		)
		self._log(f"[Alert] {self.channel} {transition.value} -> {self._phase.value}")
		self._sink(ev)
		return ev


class AudioCommand(str, Enum):
	PLAY = "play"
	PAUSE = "pause"


@dataclass(frozen=True)
class AudioAction:
	command: AudioCommand
	channel: str
	volume: float = 1.0

	def to_dict(self) -> dict:
		return {"action": self.command.value, "channel": self.channel, "volume": self.volume}


class NotificationArbiter:
	"""
	Merge several alert channels into one looping audio output.

	The output plays while at least one channel is FIRING: the first START
	sends PLAY (at that channel's volume), the last STOP sends PAUSE.
	Other transitions are ignored.
	"""

	def __init__(self, output: Optional[Callable[[AudioAction], None]] = None) -> None:
		self._output: Callable[[AudioAction], None] = output or (lambda _a: None)
		self._firing: Set[str] = set()

	@property
	def playing(self) -> bool:
		return bool(self._firing)

	@property
	def firing_channels(self) -> Set[str]:
		return set(self._firing)

	def __call__(self, event: AlertEvent) -> None:
		if event.transition is AlertTransition.START:
			if event.channel in self._firing:
				return
			self._firing.add(event.channel)
			if len(self._firing) == 1:
				self._output(AudioAction(AudioCommand.PLAY, event.channel, event.volume))
		elif event.transition is AlertTransition.STOP:
			if event.channel not in self._firing:
				return
			self._firing.discard(event.channel)
			if not self._firing:
				self._output(AudioAction(AudioCommand.PAUSE, event.channel, event.volume))
