from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Landmark:
	"""
	A single tracked point in normalized coordinates ([0..1] per axis, z is
	relative depth as reported by the tracker).
	"""

	x: float
	y: float
	z: float = 0.0

	@classmethod
	def from_any(cls, obj: Any) -> "Landmark":
		"""
		Accept a Landmark, anything with x/y/z attributes (MediaPipe
		NormalizedLandmark), a mapping or an (x, y[, z]) sequence.
		"""
		if isinstance(obj, Landmark):
			return obj
		if isinstance(obj, dict):
			return cls(float(obj["x"]), float(obj["y"]), float(obj.get("z", 0.0) or 0.0))
		if hasattr(obj, "x") and hasattr(obj, "y"):
			return cls(float(obj.x), float(obj.y), float(getattr(obj, "z", 0.0) or 0.0))
		seq = list(obj)
		return cls(float(seq[0]), float(seq[1]), float(seq[2]) if len(seq) > 2 else 0.0)


# Ordered landmark sequence; index i always refers to the same anatomical point.
LandmarkSet = Sequence[Landmark]

# Fixed-size closed polygon approximating the face boundary.
SimplifiedContour = Tuple[Landmark, ...]


def to_landmark_set(points: Optional[Sequence[Any]]) -> Optional[Tuple[Landmark, ...]]:
	if points is None:
		return None
	return tuple(Landmark.from_any(p) for p in points)


@dataclass(frozen=True)
class HolisticFrame:
	"""
	Model-agnostic holistic tracker output for a single video frame.

	Any landmark set may be None when the tracker did not see that part.
	"""

	backend: str = "external"
	t_host: Optional[float] = None
	face: Optional[Tuple[Landmark, ...]] = None
	left_hand: Optional[Tuple[Landmark, ...]] = None
	right_hand: Optional[Tuple[Landmark, ...]] = None
	pose: Optional[Tuple[Landmark, ...]] = None
