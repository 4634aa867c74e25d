from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence
from urllib.parse import urljoin

import requests

from ..core.constants import DEFAULT_FACE_ORACLE_TIMEOUT_SECONDS
from ..core.exceptions import FaceServiceUnavailableError
from .model import FaceMatch
from .oracle import FaceOracle

logger = logging.getLogger(__name__)

RECOGNIZE_PATH = "/api/v1/recognition/recognize"

# CompreFace answers 400 with this code when the image holds no face.
NO_FACE_FOUND_CODE = 28


class CompreFaceClient(FaceOracle):
    """Client for the CompreFace recognition endpoint.

    Images are sent as base64 strings in the JSON body, as the kiosk captures
    them.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_FACE_ORACLE_TIMEOUT_SECONDS,
        limit: int = 1,
        session: Optional[requests.Session] = None,
    ):
        self._url = urljoin(base_url.rstrip("/") + "/", RECOGNIZE_PATH.lstrip("/"))
        self._api_key = api_key
        self._timeout = float(timeout)
        self._limit = int(limit)
        self._session = session or requests.Session()

    def match_face(self, image: str, subject: Optional[str] = None) -> Sequence[FaceMatch]:
        params = {"limit": str(self._limit)}
        if subject:
            params["subject"] = subject

        try:
            res = self._session.post(
                self._url,
                params=params,
                json={"file": image},
                headers={"x-api-key": self._api_key},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Face recognition request timed out after %.1fs", self._timeout)
            raise FaceServiceUnavailableError("Face recognition service timed out") from e
        except requests.exceptions.RequestException as e:
            logger.error("Face recognition request failed: %s", e)
            raise FaceServiceUnavailableError("Face recognition service unreachable") from e

        try:
            data = res.json()
        except ValueError as e:
            logger.error("Face recognition returned non-JSON body (status %s)", res.status_code)
            raise FaceServiceUnavailableError("Face recognition service returned an invalid response") from e

        if res.status_code != 200:
            if isinstance(data, dict) and data.get("code") == NO_FACE_FOUND_CODE:
                return []
            logger.error("Face recognition returned status %s: %s", res.status_code, data)
            raise FaceServiceUnavailableError(f"Face recognition service error ({res.status_code})")

        return parse_recognition(data)


def parse_recognition(data: Any) -> List[FaceMatch]:
    """Flatten a CompreFace ``result`` payload into matches, best first."""
    if not isinstance(data, dict):
        raise FaceServiceUnavailableError("Face recognition service returned an invalid response")

    matches: List[FaceMatch] = []
    for face in data.get("result") or []:
        for candidate in face.get("subjects") or []:
            try:
                matches.append(
                    FaceMatch(
                        subject=str(candidate["subject"]),
                        similarity=float(candidate["similarity"]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Ignoring malformed recognition candidate: %r", candidate)
    matches.sort(key=lambda m: m.similarity, reverse=True)
    return matches
