from __future__ import annotations

from typing import Any, Optional, Tuple

from shrimpcheck.landmarks.base import LandmarkProvider
from shrimpcheck.landmarks.types import HolisticFrame, Landmark


def _landmark_list(result: Any) -> Optional[Tuple[Landmark, ...]]:
	if not result:
		return None
	points = getattr(result, "landmark", None)
	if not points:
		return None
	return tuple(Landmark(float(p.x), float(p.y), float(getattr(p, "z", 0.0) or 0.0)) for p in points)


class MediaPipeHolisticProvider(LandmarkProvider):
	"""
	MediaPipe Holistic provider that outputs face mesh, both hands and pose.

	Notes:
	- Coordinates stay normalized; the core never needs pixel space.
	- Missing parts are reported as None, never as empty tuples.
	"""

	def __init__(
		self,
		model_complexity: int = 1,
		refine_face_landmarks: bool = False,
		min_detection_confidence: float = 0.5,
		min_tracking_confidence: float = 0.5,
	) -> None:
		try:
			import mediapipe as mp  # type: ignore
		except ImportError as e:
			raise RuntimeError(
				"MediaPipe is not installed. Install tracker deps with: pip install '.[tracker]'"
			) from e

		self._holistic = mp.solutions.holistic.Holistic(
			static_image_mode=False,
			model_complexity=int(model_complexity),
			refine_face_landmarks=bool(refine_face_landmarks),
			min_detection_confidence=float(min_detection_confidence),
			min_tracking_confidence=float(min_tracking_confidence),
		)

	def name(self) -> str:
		return "mediapipe_holistic"

	def infer_rgb(self, rgb, t_host: Optional[float] = None) -> HolisticFrame:
		res = self._holistic.process(rgb)
		if not res:
			return HolisticFrame(backend=self.name(), t_host=t_host)
		return HolisticFrame(
			backend=self.name(),
			t_host=t_host,
			face=_landmark_list(getattr(res, "face_landmarks", None)),
			left_hand=_landmark_list(getattr(res, "left_hand_landmarks", None)),
			right_hand=_landmark_list(getattr(res, "right_hand_landmarks", None)),
			pose=_landmark_list(getattr(res, "pose_landmarks", None)),
		)

	def close(self) -> None:
		if self._holistic:
			self._holistic.close()
			self._holistic = None
