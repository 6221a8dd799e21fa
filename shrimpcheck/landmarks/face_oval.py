from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from shrimpcheck.landmarks.types import Landmark, SimplifiedContour

# MediaPipe face mesh face-oval boundary, walked clockwise from the forehead.
FACE_OVAL_RING: Tuple[int, ...] = (
	10, 338, 297, 332, 284, 251, 389, 356, 454, 323, 361, 288,
	397, 365, 379, 378, 400, 377, 152, 148, 176, 149, 150, 136,
	172, 58, 132, 93, 234, 127, 162, 21, 54, 103, 67, 109,
)

FACE_OVAL_STEP = 3


def _subsample(ring: Sequence[int], step: int) -> Tuple[int, ...]:
	return tuple(ring[i] for i in range(0, len(ring), step))


FACE_OVAL_SIMPLE: Tuple[int, ...] = _subsample(FACE_OVAL_RING, FACE_OVAL_STEP)
CONTOUR_SIZE = len(FACE_OVAL_SIMPLE)

# Closed polygon edges over contour positions (not mesh indices).
FACE_OVAL_SIMPLE_CONNECTIONS: List[Tuple[int, int]] = [
	(i, (i + 1) % CONTOUR_SIZE) for i in range(CONTOUR_SIZE)
]

_MIN_FACE_LANDMARKS = max(FACE_OVAL_SIMPLE) + 1


def simplify_face(face_landmarks: Optional[Sequence[Landmark]]) -> Optional[SimplifiedContour]:
	"""
	Reduce a full face mesh to the fixed simplified face-oval contour.

	Returns None when the face is absent or the mesh is too short to contain
	every referenced index; otherwise exactly CONTOUR_SIZE points.
	"""
	if face_landmarks is None or len(face_landmarks) < _MIN_FACE_LANDMARKS:
		return None
	return tuple(Landmark.from_any(face_landmarks[i]) for i in FACE_OVAL_SIMPLE)
