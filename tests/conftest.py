import heapq
import itertools
import math
from typing import Callable, List, Optional, Tuple

import pytest

from shrimpcheck.landmarks.face_oval import FACE_OVAL_SIMPLE
from shrimpcheck.landmarks.types import Landmark


class ManualTimer:
	def __init__(self, deadline: float) -> None:
		self.deadline = deadline
		self.cancelled = False

	def cancel(self) -> None:
		self.cancelled = True


class ManualScheduler:
	"""Deterministic stand-in for the event loop's call_later."""

	def __init__(self) -> None:
		self.now = 0.0
		self._seq = itertools.count()
		self._queue: List[Tuple[float, int, ManualTimer, Callable[[], None]]] = []

	def clock(self) -> float:
		return self.now

	def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
		timer = ManualTimer(self.now + delay)
		heapq.heappush(self._queue, (timer.deadline, next(self._seq), timer, callback))
		return timer

	@property
	def pending(self) -> int:
		return sum(1 for _, _, t, _ in self._queue if not t.cancelled)

	def advance(self, seconds: float) -> None:
		target = self.now + seconds
		while self._queue and self._queue[0][0] <= target:
			deadline, _, timer, callback = heapq.heappop(self._queue)
			self.now = deadline
			if not timer.cancelled:
				callback()
		self.now = target


@pytest.fixture
def scheduler() -> ManualScheduler:
	return ManualScheduler()


def make_face(offset: float = 0.0, scale: float = 0.2, size: int = 468) -> List[Landmark]:
	"""
	Synthetic face mesh: the simplified oval indices sit on a circle of
	`scale` around (0.5 + offset, 0.5); every other point is at the centre.
	"""
	cx, cy = 0.5 + offset, 0.5
	pts = [Landmark(cx, cy, 0.0)] * size
	k = len(FACE_OVAL_SIMPLE)
	for pos, idx in enumerate(FACE_OVAL_SIMPLE):
		a = 2.0 * math.pi * pos / k
		pts[idx] = Landmark(cx + scale * math.cos(a), cy + scale * math.sin(a), 0.0)
	return pts


def make_hand(tip: Optional[Tuple[float, float]] = None, rest: Tuple[float, float] = (0.95, 0.95)) -> List[Landmark]:
	"""21-point hand; all points at `rest` except the index fingertip at `tip`."""
	pts = [Landmark(rest[0], rest[1], 0.0)] * 21
	if tip is not None:
		pts[8] = Landmark(tip[0], tip[1], 0.0)
	return pts


@pytest.fixture
def face():
	return make_face


@pytest.fixture
def hand():
	return make_hand
