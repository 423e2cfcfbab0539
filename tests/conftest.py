import os

import pytest

os.environ.setdefault("LOG_LEVEL", "DEBUG")


def meeting(weeks, class_name="Math", room="R101", teacher="Alice"):
    return {
        "weeks": weeks,
        "className": class_name,
        "classroomName": room,
        "teacherName": teacher,
    }


@pytest.fixture
def make_meeting():
    return meeting


@pytest.fixture
def simple_payload():
    return {"data": [{"monday": [meeting("1,2")]}]}


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as c:
        yield c
