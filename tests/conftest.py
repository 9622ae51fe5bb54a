"""
Pytest Configuration and Fixtures
"""
import asyncio
import os
import tempfile

# Settings dibaca saat import, jadi env harus di-set sebelum import persuratan
_TMP_DIR = tempfile.mkdtemp(prefix="persuratan-test-")
os.environ.setdefault("DATABASE_URI", f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-untuk-pytest")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_DIRECTORY", os.path.join(_TMP_DIR, "logs"))
os.environ.setdefault("AUTH_RATE_LIMIT_CALLS", "1000")
os.environ["REDIS_HOST"] = ""

import pytest
from fastapi.testclient import TestClient

ADMIN_EMAIL = "admin@dprd-kalsel.go.id"
ADMIN_PASSWORD = "Arsip#2025Aman"
MEMBER_EMAIL = "tamu@dprd-kalsel.go.id"
MEMBER_PASSWORD = "Tamu#2025Aman"


async def _reset_database():
    from persuratan.core.database import drop_db, init_db

    await drop_db()
    await init_db()


async def _create_user(name, email, password, role, is_active=True):
    from persuratan.auth.jwt import get_password_hash
    from persuratan.core.database import async_session
    from persuratan.repositories.user import UserRepository

    async with async_session() as session:
        repo = UserRepository(session)
        user = await repo.create(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
        )
        if not is_active:
            user = await repo.update(user.id, {"is_active": False})
        return {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
            "password": password,
        }


def login(client, email, password):
    """Ambil CSRF token, login, lalu pasang header x-csrf-token di client."""
    csrf_token = client.get("/api/csrf-token").json()["csrfToken"]
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    client.headers["x-csrf-token"] = csrf_token
    return response.json()


@pytest.fixture
def login_as():
    return login


@pytest.fixture
def db():
    """Database kosong untuk setiap test."""
    asyncio.run(_reset_database())
    yield


@pytest.fixture
def admin_user(db):
    from persuratan.models.enums import UserRole

    return asyncio.run(_create_user("Petugas Arsip", ADMIN_EMAIL, ADMIN_PASSWORD, UserRole.ADMIN))


@pytest.fixture
def member_user(db):
    from persuratan.models.enums import UserRole

    return asyncio.run(_create_user("Tamu DPRD", MEMBER_EMAIL, MEMBER_PASSWORD, UserRole.MEMBER))


@pytest.fixture
def inactive_user(db):
    from persuratan.models.enums import UserRole

    return asyncio.run(
        _create_user("User Nonaktif", "nonaktif@dprd-kalsel.go.id", "Nonaktif#2025", UserRole.MEMBER, is_active=False)
    )


@pytest.fixture
def test_client(db):
    """Client tanpa login."""
    from main import app

    with TestClient(app, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def admin_client(admin_user):
    from main import app

    with TestClient(app, base_url="http://testserver") as client:
        login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
        yield client


@pytest.fixture
def member_client(member_user):
    from main import app

    with TestClient(app, base_url="http://testserver") as client:
        login(client, MEMBER_EMAIL, MEMBER_PASSWORD)
        yield client


@pytest.fixture
def sample_surat_masuk_data():
    """Sample surat masuk data for testing"""
    return {
        "noUrut": 1,
        "nomorSurat": "005/123/DPRD",
        "tanggalSurat": "2025-01-06",
        "tanggalDiteruskan": "2025-01-07",
        "asalSurat": "Dinas Pendidikan",
        "perihal": "Undangan Rapat Koordinasi",
        "keterangan": "Segera",
    }


@pytest.fixture
def create_surat_masuk(admin_client, sample_surat_masuk_data):
    """Factory: buat surat masuk lewat API, return JSON response."""
    def _create(**overrides):
        payload = {**sample_surat_masuk_data, **overrides}
        response = admin_client.post("/api/surat-masuk", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
