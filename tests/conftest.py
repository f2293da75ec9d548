"""Shared pytest fixtures for the feed backend tests."""

import json
import os
from typing import Dict, Generator, List, Optional, Tuple
from unittest.mock import Mock

# Settings are read at import time: configure the test environment first
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("STORAGE_PUBLIC_BASE_URL", "https://cdn.example.test/storage/v1/object/public/videos")

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings
from app.db.models.videos import Video
from app.features.feed.catalog import FeedVideo
from app.features.feed.cursor import LoopNotice

BASE_URL = settings.STORAGE_PUBLIC_BASE_URL


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def tick(self, seconds: float) -> None:
        self.now += seconds


class DictBackend:
    """In-memory stand-in for the per-device key/value repository.

    Writes made with commit=False stay pending until the joined store commits.
    """

    def __init__(self):
        self.data: Dict[Tuple[str, str], str] = {}
        self.pending: Dict[Tuple[str, str], str] = {}
        self.write_error: Optional[Exception] = None

    def read(self, device_id: str, key: str) -> Optional[str]:
        return self.pending.get((device_id, key), self.data.get((device_id, key)))

    def write(self, device_id: str, key: str, value: str, *, commit: bool = True) -> None:
        if self.write_error:
            raise self.write_error
        target = self.data if commit else self.pending
        target[(device_id, key)] = value

    def commit(self) -> None:
        self.data.update(self.pending)
        self.pending.clear()

    def rollback(self) -> None:
        self.pending.clear()


class FakeVideoStore:
    """Stand-in for VideoRepository: rows for reads, recorded likes writes.

    `backend` plays the device repository sharing the same transaction.
    """

    def __init__(self, rows: Optional[List[Video]] = None, *, backend: Optional[DictBackend] = None):
        self.rows = list(rows or [])
        self.backend = backend
        self.list_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None
        self.commit_error: Optional[Exception] = None
        self.writes: List[Tuple[int, int]] = []
        self.rollbacks = 0
        self._pending: List[Tuple[int, int]] = []

    def list_all(self):
        if self.list_error:
            raise self.list_error
        return list(self.rows)

    def _row(self, video_id: int) -> Optional[Video]:
        return next((r for r in self.rows if r.id == video_id), None)

    def set_likes(self, video_id: int, likes: int, *, commit: bool = True) -> bool:
        if self.update_error:
            raise self.update_error
        if self._row(video_id) is None:
            return False
        self._pending.append((video_id, likes))
        if commit:
            self.commit()
        return True

    def commit(self) -> None:
        if self.commit_error:
            raise self.commit_error
        for video_id, likes in self._pending:
            self._row(video_id).likes = likes
            self.writes.append((video_id, likes))
        self._pending.clear()
        if self.backend is not None:
            self.backend.commit()

    def rollback(self) -> None:
        self.rollbacks += 1
        self._pending.clear()
        if self.backend is not None:
            self.backend.rollback()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_row(id: int, categories, *, likes: Optional[int] = 0, file_name: Optional[str] = None, title: str = None) -> Video:
    raw = categories if isinstance(categories, str) or categories is None else json.dumps(categories)
    return Video(
        id=id,
        file_name=file_name or f"file-{id}.mp4",
        title=title or f"Video {id}",
        description=f"Description {id}",
        categories=raw,
        external_link=f"https://example.com/{id}",
        likes=likes,
    )


def make_video(id: int, categories=(), likes: int = 0) -> FeedVideo:
    return FeedVideo(
        id=id,
        title=f"Video {id}",
        description=f"Description {id}",
        file_name=f"file-{id}.mp4",
        video_url=f"{BASE_URL}/file-{id}.mp4",
        categories=list(categories),
        external_link=None,
        likes=likes,
    )


def admin_token(role: str = "admin") -> str:
    return jwt.encode(
        {"sub": "42", "email": "admin@example.com", "app_metadata": {"role": role}},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notice(clock) -> LoopNotice:
    return LoopNotice(duration=3.0, clock=clock)


@pytest.fixture
def sample_catalog() -> List[FeedVideo]:
    """Catalog used by the concrete scenarios: ids 1..3."""
    return [
        make_video(1, ["a", "b"]),
        make_video(2, ["b"]),
        make_video(3, ["c"]),
    ]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def mock_s3():
    s3 = Mock()
    s3.delete_object = Mock(return_value={})
    return s3


@pytest.fixture
def client(engine, mock_s3) -> Generator[TestClient, None, None]:
    from app.api.v1 import dependencies
    from app.db.repositories.videos import VideoRepository
    from app.db.session import get_session
    from app.features.content.services import ContentService
    from app.features.feed.session import FeedSessionStore
    from app.main import app

    def _session():
        with Session(engine) as session:
            yield session

    store = FeedSessionStore(ttl_seconds=3600, notice_seconds=3.0)

    def _content_service(video_repo: VideoRepository = Depends(dependencies.get_video_repository)):
        return ContentService(repo=video_repo, s3_client_factory=lambda: mock_s3)

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[dependencies.get_feed_session_store] = lambda: store
    app.dependency_overrides[dependencies.get_content_service] = _content_service

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token()}"}
