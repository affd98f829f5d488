import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.main import create_app

START = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
START_MILLIS = 1714557600000


class SteppingClock:
    """Returns START, then advances by `step` on every call"""

    def __init__(self, start=START, step=timedelta(milliseconds=1)):
        self.current = start
        self.step = step

    def __call__(self):
        now = self.current
        self.current += self.step
        return now


class ScriptedRandom(random.Random):
    """random() yields the given values in turn, repeating the last one"""

    def __init__(self, *values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def make_client(upload_dir):
    def _make(**overrides):
        overrides.setdefault("upload_dir", upload_dir)
        overrides.setdefault("variant", "progress")
        overrides.setdefault("clock", SteppingClock())
        overrides.setdefault("rng", random.Random(1234))
        app = create_app(**overrides)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client(variant="progress")


def video_file(name="clip.mov", size=1024, content_type="video/quicktime", fill=b"\x01"):
    return {"video": (name, fill * size, content_type)}
