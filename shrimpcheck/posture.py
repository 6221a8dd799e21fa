from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from shrimpcheck.landmarks.types import Landmark, SimplifiedContour


class PostureLabel(str, Enum):
	CORRECT = "correct"
	INCORRECT = "incorrect"


class MatchReason(str, Enum):
	MATCH = "match"
	NO_REFERENCES = "no_references"
	ABSENT = "absent"


class PostureStatus(str, Enum):
	NO_REFERENCES = "no_references"
	GONE = "gone"
	GOOD = "good"
	BAD = "bad"


@dataclass(frozen=True)
class ReferencePosture:
	contour: SimplifiedContour
	label: PostureLabel

	@property
	def correct(self) -> bool:
		return self.label is PostureLabel.CORRECT


@dataclass(frozen=True)
class ClassificationResult:
	"""
	Outcome of matching the current contour against the reference list.

	`best_index` is only set when `reason` is MATCH.
	"""

	reason: MatchReason
	best_index: Optional[int] = None

	@classmethod
	def absent(cls) -> "ClassificationResult":
		return cls(MatchReason.ABSENT)

	@classmethod
	def no_references(cls) -> "ClassificationResult":
		return cls(MatchReason.NO_REFERENCES)


def landmark_distance(a: Landmark, b: Landmark) -> float:
	# Cube root of the squared sum; kept as-is so stored scores stay comparable.
	sq = (a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2
	return sq ** (1.0 / 3.0)


def contour_score(current: Sequence[Landmark], reference: Sequence[Landmark]) -> float:
	"""
	Dissimilarity of two contours; lower is closer.

	Contours of different length score 0.0, which makes an incompatible
	reference look like a perfect match to `minimum_index`.
	"""
	if len(reference) != len(current):
		return 0.0
	return math.fsum(landmark_distance(c, r) for c, r in zip(current, reference))


def posture_scores(references: Sequence[ReferencePosture], current: SimplifiedContour) -> List[float]:
	return [contour_score(current, ref.contour) for ref in references]


def minimum_index(scores: Sequence[float]) -> Optional[int]:
	"""Index of the smallest score; the earliest index wins ties."""
	index: Optional[int] = None
	best = sys.float_info.max
	for i, s in enumerate(scores):
		if s < best:
			best = s
			index = i
	return index


def classify(
	current: Optional[SimplifiedContour],
	references: Sequence[ReferencePosture],
) -> ClassificationResult:
	if current is None:
		return ClassificationResult.absent()
	if not references:
		return ClassificationResult.no_references()
	return ClassificationResult(MatchReason.MATCH, minimum_index(posture_scores(references, current)))


def posture_status(result: ClassificationResult, references: Sequence[ReferencePosture]) -> PostureStatus:
	if result.reason is MatchReason.NO_REFERENCES:
		return PostureStatus.NO_REFERENCES
	if result.reason is MatchReason.ABSENT or result.best_index is None:
		return PostureStatus.GONE
	if not 0 <= result.best_index < len(references):
		return PostureStatus.GONE
	return PostureStatus.GOOD if references[result.best_index].correct else PostureStatus.BAD
