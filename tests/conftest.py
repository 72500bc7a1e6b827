"""Shared test fixtures: generated logos, an in-memory company store, an API client."""

import io
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from jobboard.api.dependencies import get_broadcaster, get_company_repository
from jobboard.core.config import Settings, get_settings
from jobboard.main import app
from jobboard.utils.file_upload import UploadStorage


def make_logo(kind: str = "circle", size: int = 256, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    """
    Draw a simple two-tone logo.

    circle: black disc in the middle of a white square
    split: left half black, right half white
    """
    if mode == "RGBA":
        img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
        ink = (0, 0, 0, 255)
    else:
        img = Image.new("RGB", (size, size), (255, 255, 255))
        ink = (0, 0, 0)

    draw = ImageDraw.Draw(img)
    if kind == "circle":
        margin = size * 3 // 16
        draw.ellipse([margin, margin, size - margin, size - margin], fill=ink)
    elif kind == "split":
        draw.rectangle([0, 0, size // 2 - 1, size - 1], fill=ink)
    else:
        raise ValueError(kind)

    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class InMemoryCompanyRepository:
    """CompanyRepository backed by a dict."""

    def __init__(self):
        self.docs = {}

    def find_by_id(self, company_id: str) -> Optional[dict]:
        doc = self.docs.get(company_id)
        return dict(doc) if doc else None

    def find_by_name(self, name: str) -> Optional[dict]:
        for doc in self.docs.values():
            if doc["name"] == name:
                return dict(doc)
        return None

    def find_by_email(self, email: str) -> Optional[dict]:
        for doc in self.docs.values():
            if doc["email"] == email:
                return dict(doc)
        return None

    def list_companies(self) -> List[dict]:
        return [dict(d) for d in self.docs.values()]

    def save(self, company: dict) -> dict:
        doc = dict(company)
        now = datetime.now(timezone.utc)
        doc["updated_at"] = now
        if not doc.get("_id"):
            doc["_id"] = uuid.uuid4().hex[:24]
            doc.setdefault("created_at", now)
        self.docs[doc["_id"]] = doc
        return dict(doc)

    def delete(self, company_id: str) -> bool:
        return self.docs.pop(company_id, None) is not None

    def add(self, name: str, logo_hash: Optional[str] = None, **fields) -> dict:
        """Test helper: insert a company with sensible defaults."""
        slug = name.lower().replace(" ", "")
        return self.save({
            "name": name,
            "email": fields.get("email", f"hello@{slug}.lk"),
            "location": fields.get("location", "Colombo"),
            "contact_number": fields.get("contact_number", "+94-112345678"),
            "reg_number": fields.get("reg_number", "PV/12345/2020"),
            "logo_hash": logo_hash,
        })


class RecordingBroadcaster:
    """Stands in for CompanyEventBroadcaster and remembers what was published."""

    def __init__(self):
        self.events = []

    async def publish(self, event: str, payload) -> int:
        self.events.append((event, payload))
        return 1


@pytest.fixture
def circle_png() -> bytes:
    return make_logo("circle")


@pytest.fixture
def split_png() -> bytes:
    return make_logo("split")


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir: Path) -> UploadStorage:
    return UploadStorage(str(upload_dir))


@pytest.fixture
def repo() -> InMemoryCompanyRepository:
    return InMemoryCompanyRepository()


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    return Settings(
        upload_dir=str(upload_dir),
        max_logo_size_mb=1,
        logo_hash_algorithm="ahash",
        logo_hash_size=8,
        logo_match_threshold=10,
    )


@pytest.fixture
def client(settings, repo, broadcaster):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_company_repository] = lambda: repo
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    yield TestClient(app)
    app.dependency_overrides.clear()


def leftover_uploads(upload_dir: Path) -> list:
    """Files still sitting in the upload directory."""
    if not upload_dir.exists():
        return []
    return list(upload_dir.iterdir())
