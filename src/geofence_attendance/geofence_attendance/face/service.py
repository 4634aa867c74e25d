from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import FACE_MATCH_THRESHOLD
from ..core.enums import FailureKind
from ..core.exceptions import AttendanceError, FaceServiceUnavailableError
from .model import FaceMatch
from .oracle import FaceOracle

logger = logging.getLogger(__name__)


class FaceVerifier:
    """Confirms a captured face belongs to the claimed staff identity."""

    def __init__(self, oracle: FaceOracle, *, threshold: float = FACE_MATCH_THRESHOLD):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be within [0, 1]")
        self._oracle = oracle
        self._threshold = float(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def best_match(self, image: str, subject: str) -> Optional[FaceMatch]:
        """Best candidate for ``subject``; candidates for other identities are ignored."""
        matches = self._oracle.match_face(image, subject=subject)
        own = [m for m in matches if m.subject == subject]
        if not own:
            return None
        return max(own, key=lambda m: m.similarity)

    def verify(self, image: str, subject: str) -> FaceMatch:
        try:
            match = self.best_match(image, subject)
        except FaceServiceUnavailableError as e:
            raise AttendanceError(
                FailureKind.BIOMETRIC_SERVICE_UNAVAILABLE,
                "Face recognition is unavailable right now. Please try again.",
            ) from e

        if match is None:
            logger.info("No face match for subject %r", subject)
            raise AttendanceError(FailureKind.FACE_MISMATCH, "Face not recognized. Please try again.")
        if match.similarity < self._threshold:
            logger.info(
                "Face similarity %.3f below threshold %.3f for subject %r",
                match.similarity,
                self._threshold,
                subject,
            )
            raise AttendanceError(FailureKind.FACE_MISMATCH, "Face mismatch. Please try again.")
        return match
