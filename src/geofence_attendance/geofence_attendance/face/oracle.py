from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FaceMatch


class FaceOracle(Protocol):
    """External face-recognition service.

    ``match_face`` returns candidate identities with similarity in [0, 1]
    (empty when no face is recognized) and raises
    ``FaceServiceUnavailableError`` when the service cannot answer.
    """

    def match_face(self, image: str, subject: Optional[str] = None) -> Sequence[FaceMatch]:
        raise NotImplementedError
