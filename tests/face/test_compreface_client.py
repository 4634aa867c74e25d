from __future__ import annotations

import pytest
import requests

from src.geofence_attendance.geofence_attendance.core.exceptions import FaceServiceUnavailableError
from src.geofence_attendance.geofence_attendance.face.compreface_client import CompreFaceClient
from src.geofence_attendance.geofence_attendance.face.model import FaceMatch


class FakeResponse:
    def __init__(self, status_code, payload=None, *, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def make_client(session, **kwargs):
    return CompreFaceClient("http://compreface:8000/", "secret-key", session=session, **kwargs)


def test_request_shape():
    session = FakeSession(FakeResponse(200, {"result": []}))
    make_client(session, timeout=3).match_face("BASE64", subject="Ama Mensah")

    url, kwargs = session.requests[0]
    assert url == "http://compreface:8000/api/v1/recognition/recognize"
    assert kwargs["params"] == {"limit": "1", "subject": "Ama Mensah"}
    assert kwargs["json"] == {"file": "BASE64"}
    assert kwargs["headers"] == {"x-api-key": "secret-key"}
    assert kwargs["timeout"] == 3.0


def test_subject_is_optional():
    session = FakeSession(FakeResponse(200, {"result": []}))
    make_client(session).match_face("BASE64")
    assert "subject" not in session.requests[0][1]["params"]


def test_matches_are_flattened_best_first():
    payload = {
        "result": [
            {
                "box": {"probability": 1.0},
                "subjects": [
                    {"subject": "Kofi", "similarity": 0.61},
                    {"subject": "Ama", "similarity": 0.93},
                ],
            }
        ]
    }
    matches = make_client(FakeSession(FakeResponse(200, payload))).match_face("BASE64")
    assert matches == [FaceMatch("Ama", 0.93), FaceMatch("Kofi", 0.61)]


def test_no_face_found_is_an_empty_result():
    response = FakeResponse(400, {"message": "No face is found in the given image", "code": 28})
    assert make_client(FakeSession(response)).match_face("BASE64") == []


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.exceptions.ConnectTimeout("slow")),
        FakeSession(error=requests.exceptions.ConnectionError("refused")),
        FakeSession(FakeResponse(500, {"message": "internal"})),
        FakeSession(FakeResponse(401, {"message": "invalid api key", "code": 2})),
        FakeSession(FakeResponse(502, invalid_json=True)),
    ],
)
def test_service_failures_raise_unavailable(session):
    with pytest.raises(FaceServiceUnavailableError):
        make_client(session).match_face("BASE64", subject="Ama")
