from shrimpcheck.landmarks.face_oval import (
	CONTOUR_SIZE,
	FACE_OVAL_RING,
	FACE_OVAL_SIMPLE,
	FACE_OVAL_SIMPLE_CONNECTIONS,
	simplify_face,
)
from shrimpcheck.landmarks.types import Landmark


def test_simple_oval_is_every_third_ring_index():
	assert FACE_OVAL_SIMPLE == (10, 332, 389, 323, 397, 378, 152, 149, 172, 93, 162, 103)
	assert CONTOUR_SIZE == 12
	assert len(FACE_OVAL_RING) == 36


def test_connections_close_the_polygon():
	assert FACE_OVAL_SIMPLE_CONNECTIONS[0] == (0, 1)
	assert FACE_OVAL_SIMPLE_CONNECTIONS[-1] == (CONTOUR_SIZE - 1, 0)


def test_simplify_picks_indices_in_order():
	mesh = [Landmark(i / 1000.0, 0.0, 0.0) for i in range(468)]
	contour = simplify_face(mesh)
	assert contour is not None
	assert len(contour) == CONTOUR_SIZE
	assert [round(p.x * 1000) for p in contour] == list(FACE_OVAL_SIMPLE)


def test_simplify_absent_or_short_mesh():
	assert simplify_face(None) is None
	assert simplify_face([]) is None
	assert simplify_face([Landmark(0.0, 0.0)] * max(FACE_OVAL_SIMPLE)) is None
	assert simplify_face([Landmark(0.0, 0.0)] * (max(FACE_OVAL_SIMPLE) + 1)) is not None


def test_simplify_accepts_attribute_objects():
	class NL:
		def __init__(self, x, y, z):
			self.x, self.y, self.z = x, y, z

	contour = simplify_face([NL(0.1, 0.2, 0.3)] * 468)
	assert contour[0] == Landmark(0.1, 0.2, 0.3)
