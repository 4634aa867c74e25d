from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FaceMatch:
    """One candidate identity returned by the face-recognition service."""

    subject: str
    similarity: float

    def to_dict(self) -> dict:
        return {"subject": self.subject, "similarity": self.similarity}
