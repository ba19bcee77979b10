import asyncio
import os
import shutil
import tempfile

import pytest

# Settings are read at import time, so point them at a scratch area first
_TMP_ROOT = tempfile.mkdtemp(prefix="school_directory_test_")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///" + os.path.join(_TMP_ROOT, "schools.db"))
os.environ.setdefault("UPLOAD_FOLDER", os.path.join(_TMP_ROOT, "schoolImages"))
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_ROOT, "logs"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


@pytest.fixture(scope="session")
def app():
    from school_directory import create_app
    return create_app()


@pytest.fixture()
def upload_dir():
    from school_directory.core.config import get_upload_folder
    folder = get_upload_folder()
    for entry in os.listdir(folder):
        os.remove(os.path.join(folder, entry))
    return folder


@pytest.fixture()
def client(app, upload_dir):
    from school_directory.core.database import reset_db
    asyncio.run(reset_db())
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def school_form():
    return {
        "name": "Greenwood High",
        "address": "12 Park Avenue, Sector 4",
        "city": "Pune",
        "state": "Maharashtra",
        "contact": "9876543210",
        "email_id": "office@greenwood.example.com",
    }


@pytest.fixture()
def png_bytes():
    return PNG_HEADER + b"\x00" * 256


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TMP_ROOT, ignore_errors=True)
