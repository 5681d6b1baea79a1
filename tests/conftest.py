import json

import pytest

from logretrieval.config import Config
from logretrieval.web import create_app


def write_log(log_dir, day, records):
    """Write one app-<day>.log file with one JSON record (or raw string) per line."""
    path = log_dir / f"app-{day}.log"
    with open(path, "w") as f:
        for record in records:
            f.write((record if isinstance(record, str) else json.dumps(record)) + "\n")
    return path


@pytest.fixture
def log_dir(tmp_path):
    """A log directory with two days of request logs."""
    write_log(tmp_path, "2024-01-15", [
        {"timestamp": "2024-01-15T10:30:00Z", "level": "INFO", "log_id": "req-1",
         "message": "Completed POST /api/v1/auth/login | Status: 200 | Duration: 45ms"},
        "{not json",
        {"timestamp": "2024-01-15T11:00:00Z", "level": "ERROR", "log_id": "req-2",
         "message": "Authentication failed"},
    ])
    write_log(tmp_path, "2024-01-16", [
        {"timestamp": "2024-01-16T08:00:00Z", "level": "INFO", "log_id": "req-1",
         "message": "Started GET /api/v1/users | IP: 10.0.0.1"},
    ])
    return tmp_path


@pytest.fixture
def app(log_dir):
    """Create a Flask test app over the sample log directory."""
    application = create_app(Config(log_dir=str(log_dir)))
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
