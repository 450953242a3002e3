import os
import sys
from datetime import datetime, timezone

import pytest

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from shared import FeedbackStore  # noqa: E402
from feedback.app import create_app  # noqa: E402


def make_payload(**overrides):
    payload = {
        "email": "a@x.com",
        "client_name": "Acme",
        "project": "Website",
        "reactivity": 4,
        "deadlines": 4,
        "deliverables": 4,
        "professionalism": 4,
    }
    payload.update(overrides)
    return payload


def at(year, month, day=1, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    with FeedbackStore(str(tmp_path / "feedback.db")) as s:
        yield s


@pytest.fixture
def app(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
