from __future__ import annotations

from typing import Optional, Sequence

from shrimpcheck.landmarks.types import Landmark

# MediaPipe hand landmark indices.
HAND_LANDMARKS = {
	"THUMB_TIP": 4,
	"INDEX_TIP": 8,
	"MIDDLE_TIP": 12,
	"RING_TIP": 16,
	"PINKY_TIP": 20,
}

FINGERTIP_INDICES = tuple(HAND_LANDMARKS.values())


def point_in_polygon(point: Landmark, polygon: Sequence[Landmark]) -> bool:
	"""
	Ray-casting test on the x/y plane (pnpoly). The polygon is closed
	implicitly, last vertex back to the first.

	Points exactly on an edge or vertex get a fixed but unspecified answer.
	"""
	n = len(polygon)
	if n < 3:
		return False
	x, y = point.x, point.y
	inside = False
	j = n - 1
	for i in range(n):
		xi, yi = polygon[i].x, polygon[i].y
		xj, yj = polygon[j].x, polygon[j].y
		# (yi > y) != (yj > y) also guarantees yj != yi below.
		if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
			inside = not inside
		j = i
	return inside


def hand_in_face(
	hand: Optional[Sequence[Landmark]],
	contour: Optional[Sequence[Landmark]],
) -> bool:
	"""True if any fingertip of `hand` lies inside the face contour."""
	if not hand or not contour:
		return False
	if len(hand) <= max(FINGERTIP_INDICES):
		return False
	for i in FINGERTIP_INDICES:
		if point_in_polygon(Landmark.from_any(hand[i]), contour):
			return True
	return False


def hands_in_face(contour: Optional[Sequence[Landmark]], *hands: Optional[Sequence[Landmark]]) -> bool:
	return any(hand_in_face(hand, contour) for hand in hands)
