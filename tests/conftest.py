import io
import os
import zipfile

# Nunca tocar no flashcards.db de verdade durante os testes
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from flipcards.db.session import build_engine, get_session, init_db
from flipcards.main import app
from flipcards.utils.errors import UploadError
from flipcards.utils.image_host import UploadResult, get_image_host


class FakeImageHost:
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def upload(self, data, filename, mime_type=None):
        self.calls.append((filename, len(data), mime_type))
        if filename in self.fail_on:
            raise UploadError("Failed to upload image to image host")
        n = len(self.calls)
        return UploadResult(
            url=f"https://img.example/{n}.png",
            thumb_url=f"https://img.example/{n}.th.png",
            width=640,
            height=480,
        )


def make_zip(files=None, dirs=()):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name in dirs:
            zf.writestr(name.rstrip("/") + "/", b"")
        for name, data in (files or {}).items():
            zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def client(engine, image_host):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_image_host] = lambda: image_host
    yield TestClient(app)
    app.dependency_overrides.clear()
