"""
Pytest Configuration and Fixtures
"""
import io
from typing import Dict, Iterable, List, Optional

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from courier.services.record_kinds import PICKUP, DELIVERY


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a throw-away SQLite file"""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    from courier.config import Settings

    return Settings()


@pytest.fixture
def db_session(settings):
    """Real database session for service-level tests"""
    from courier.database import create_db_engine, create_session_factory, init_db

    engine = create_db_engine(settings)
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def test_client(settings):
    """Create test client for API testing (runs the lifespan)"""
    from courier.main import create_app

    app = create_app(settings)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, username: str, password: str) -> str:
    response = client.post("/api/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def admin_token(test_client):
    """First registered user, therefore admin"""
    return register_and_login(test_client, "admin", "adminpass")


@pytest.fixture
def user_token(test_client, admin_token):
    """Second registered user, therefore a regular user"""
    return register_and_login(test_client, "kurir1", "kurirpass")


@pytest.fixture
def admin_headers(admin_token):
    return auth_header(admin_token)


@pytest.fixture
def user_headers(user_token):
    return auth_header(user_token)


def build_workbook(
    pickup_rows: Optional[List[dict]] = None,
    delivery_rows: Optional[List[dict]] = None,
    sheets: Iterable[str] = ("Pickup", "Delivery"),
) -> bytes:
    """In-memory .xlsx with the given sheets and rows"""
    frames = {
        "Pickup": pd.DataFrame(pickup_rows or [], columns=list(PICKUP.fields)),
        "Delivery": pd.DataFrame(delivery_rows or [], columns=list(DELIVERY.fields)),
    }
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for name in sheets:
            frame = frames.get(name, pd.DataFrame({"Catatan": ["-"]}))
            frame.to_excel(writer, index=False, sheet_name=name)
    return output.getvalue()


@pytest.fixture
def sample_pickups():
    return [
        {"AWB": "JKT001", "Nama": "Budi Santoso", "Alamat": "Jl. Merdeka 1", "No. HP": "081234567890",
         "Tanggal": "2024-07-20", "User": "kurir1"},
        {"AWB": "JKT002", "Nama": "Siti Aminah", "Alamat": "Jl. Sudirman 5", "No. HP": "081298765432",
         "Tanggal": "2024-07-20", "User": "kurir1"},
        {"AWB": "BDG001", "Nama": "Andi Wijaya", "Alamat": "Jl. Asia Afrika 9", "No. HP": "082211112222",
         "Tanggal": "2024-07-21", "User": "kurir2"},
    ]


@pytest.fixture
def sample_deliveries():
    return [
        {"AWB": "JKT001", "Status": "Terkirim", "Tanggal": "2024-07-21", "User": "kurir1", "COD Amount": 100000},
        {"AWB": "JKT002", "Status": "Gagal", "Tanggal": "2024-07-21", "User": "kurir1", "COD Amount": 0},
    ]


@pytest.fixture
def sample_workbook(sample_pickups, sample_deliveries):
    return build_workbook(sample_pickups, sample_deliveries)


@pytest.fixture
def make_workbook():
    return build_workbook


@pytest.fixture
def bearer():
    return auth_header
