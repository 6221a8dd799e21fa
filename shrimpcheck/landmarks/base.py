from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from shrimpcheck.landmarks.types import HolisticFrame


class LandmarkProvider(ABC):
	"""
	Model adapter interface.

	Implementations should take an RGB image (H,W,3 uint8) and return a HolisticFrame.
	"""

	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	def infer_rgb(self, rgb, t_host: Optional[float] = None) -> HolisticFrame: ...

	@abstractmethod
	def close(self) -> None: ...
