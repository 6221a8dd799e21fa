from __future__ import annotations

from typing import List, Optional, Tuple

from shrimpcheck.landmarks.types import SimplifiedContour
from shrimpcheck.posture import PostureLabel, ReferencePosture


class ReferenceStore:
	"""
	Ordered list of captured reference postures.

	Readers get immutable snapshots, so a capture or clear between frames
	never changes the list a frame is being classified against.
	"""

	def __init__(self) -> None:
		self._items: List[ReferencePosture] = []

	def __len__(self) -> int:
		return len(self._items)

	def snapshot(self) -> Tuple[ReferencePosture, ...]:
		return tuple(self._items)

	def capture(self, contour: Optional[SimplifiedContour], correct: bool) -> Optional[ReferencePosture]:
		if contour is None:
			return None
		ref = ReferencePosture(
			contour=tuple(contour),
			label=PostureLabel.CORRECT if correct else PostureLabel.INCORRECT,
		)
		self._items.append(ref)
		return ref

	def clear(self) -> None:
		self._items = []
