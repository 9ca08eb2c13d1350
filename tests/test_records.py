"""
Test single-record CRUD, purge and full dump
"""
import pytest
from fastapi import status

from courier.errors import ConflictError, NotFoundError, ValidationError
from courier.models import Pickup, Delivery
from courier.services.record_kinds import PICKUP, DELIVERY
from courier.services.record_service import RecordService


@pytest.fixture
def sample_pickup():
    return {
        "AWB": "JKT001",
        "Nama": "Budi Santoso",
        "Alamat": "Jl. Merdeka 1",
        "No. HP": "081234567890",
        "Tanggal": "2024-07-20",
    }


class TestRecordService:

    def test_create_sets_acting_user(self, db_session, sample_pickup):
        row = RecordService(db_session).create(PICKUP, {**sample_pickup, "User": "someone"}, "kurir1")

        assert row["User"] == "kurir1"
        assert db_session.get(Pickup, "JKT001").nama == "Budi Santoso"

    @pytest.mark.parametrize("missing", ["AWB", "Tanggal"])
    def test_create_requires_awb_and_date(self, db_session, sample_pickup, missing):
        payload = {**sample_pickup, missing: None}

        with pytest.raises(ValidationError):
            RecordService(db_session).create(PICKUP, payload, "kurir1")

    def test_create_duplicate(self, db_session, sample_pickup):
        service = RecordService(db_session)
        service.create(PICKUP, sample_pickup, "kurir1")

        with pytest.raises(ConflictError):
            service.create(PICKUP, sample_pickup, "kurir2")

    def test_update_is_full_overwrite(self, db_session, sample_pickup):
        service = RecordService(db_session)
        service.create(PICKUP, sample_pickup, "kurir1")

        row = service.update(PICKUP, "JKT001", {"AWB": "XXX999", "Nama": "Budi", "Tanggal": "2024-07-22"}, "kurir2")

        assert row["AWB"] == "JKT001"
        assert row["Alamat"] is None
        assert row["No. HP"] is None
        assert row["Tanggal"] == "2024-07-22"
        assert row["User"] == "kurir2"
        assert db_session.get(Pickup, "XXX999") is None

    def test_update_missing_record(self, db_session):
        with pytest.raises(NotFoundError):
            RecordService(db_session).update(DELIVERY, "NOPE", {"Tanggal": "2024-07-20"}, "kurir1")

    def test_delivery_status_validated(self, db_session):
        with pytest.raises(ValidationError):
            RecordService(db_session).create(
                DELIVERY, {"AWB": "JKT001", "Tanggal": "2024-07-21", "Status": "Hilang"}, "kurir1"
            )

    def test_delivery_cod_defaults_to_zero(self, db_session):
        row = RecordService(db_session).create(
            DELIVERY, {"AWB": "JKT001", "Tanggal": "2024-07-21", "Status": "Proses"}, "kurir1"
        )

        assert row["COD Amount"] == 0

    def test_purge_removes_both_kinds(self, db_session):
        db_session.add_all([
            Pickup(awb="JKT001", tanggal="2024-07-20"),
            Delivery(awb="JKT001", tanggal="2024-07-21", cod_amount=0),
            Pickup(awb="JKT002", tanggal="2024-07-20"),
        ])
        db_session.commit()

        counts = RecordService(db_session).purge("JKT001")

        assert counts == {"pickup": 1, "delivery": 1}
        assert db_session.query(Pickup).count() == 1
        assert db_session.query(Delivery).count() == 0

    def test_purge_missing_awb_is_noop(self, db_session):
        assert RecordService(db_session).purge("NOPE") == {"pickup": 0, "delivery": 0}

    def test_kind_delete_leaves_other_kind(self, db_session):
        db_session.add_all([
            Pickup(awb="JKT001", tanggal="2024-07-20"),
            Delivery(awb="JKT001", tanggal="2024-07-21", cod_amount=0),
        ])
        db_session.commit()

        assert RecordService(db_session).delete(PICKUP, "JKT001") == 1
        assert db_session.query(Delivery).count() == 1

    def test_dump(self, db_session):
        db_session.add_all([
            Pickup(awb="JKT002", tanggal="2024-07-20"),
            Pickup(awb="JKT001", tanggal="2024-07-20"),
        ])
        db_session.commit()

        dump = RecordService(db_session).dump()

        assert [r["AWB"] for r in dump["pickupData"]] == ["JKT001", "JKT002"]
        assert dump["deliveryData"] == []


class TestRecordEndpoints:

    def test_create_pickup(self, test_client, user_headers, sample_pickup):
        response = test_client.post("/api/pickup", json=sample_pickup, headers=user_headers)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["User"] == "kurir1"

    def test_create_pickup_numeric_phone(self, test_client, user_headers, sample_pickup):
        response = test_client.post(
            "/api/pickup", json={**sample_pickup, "No. HP": 81234567890}, headers=user_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["No. HP"] == "81234567890"

    def test_create_pickup_missing_date(self, test_client, user_headers):
        response = test_client.post("/api/pickup", json={"AWB": "JKT001"}, headers=user_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "AWB and Tanggal are required fields."}

    def test_create_duplicate_pickup(self, test_client, user_headers, sample_pickup):
        test_client.post("/api/pickup", json=sample_pickup, headers=user_headers)

        response = test_client.post("/api/pickup", json=sample_pickup, headers=user_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_delivery_negative_cod(self, test_client, user_headers):
        response = test_client.post(
            "/api/delivery",
            json={"AWB": "JKT001", "Tanggal": "2024-07-21", "Status": "Terkirim", "COD Amount": -5},
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_delivery(self, test_client, user_headers, admin_headers):
        test_client.post(
            "/api/delivery",
            json={"AWB": "JKT001", "Tanggal": "2024-07-21", "Status": "Proses", "COD Amount": 25000},
            headers=user_headers,
        )

        # Any authenticated user may edit any record
        response = test_client.put(
            "/api/delivery/JKT001",
            json={"Tanggal": "2024-07-22", "Status": "Terkirim", "COD Amount": 30000},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data == {
            "AWB": "JKT001", "Status": "Terkirim", "Tanggal": "2024-07-22", "User": "admin", "COD Amount": 30000,
        }

    def test_update_missing_pickup(self, test_client, user_headers, sample_pickup):
        response = test_client.put("/api/pickup/NOPE", json=sample_pickup, headers=user_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_purge_requires_admin(self, test_client, user_headers):
        response = test_client.delete("/api/data/JKT001", headers=user_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_purge(self, test_client, admin_headers, user_headers, sample_pickup):
        test_client.post("/api/pickup", json=sample_pickup, headers=user_headers)
        test_client.post(
            "/api/delivery", json={"AWB": "JKT001", "Tanggal": "2024-07-21", "Status": "Gagal"}, headers=user_headers
        )

        response = test_client.delete("/api/data/JKT001", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["deleted"] == {"pickup": 1, "delivery": 1}
        assert test_client.get("/api/data", headers=admin_headers).json() == {"pickupData": [], "deliveryData": []}

    def test_purge_nonexistent_is_idempotent(self, test_client, admin_headers):
        response = test_client.delete("/api/data/NOPE", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["deleted"] == {"pickup": 0, "delivery": 0}

    def test_kind_delete_requires_admin(self, test_client, user_headers, admin_headers, sample_pickup):
        test_client.post("/api/pickup", json=sample_pickup, headers=user_headers)

        forbidden = test_client.delete("/api/pickup/JKT001", headers=user_headers)
        allowed = test_client.delete("/api/pickup/JKT001", headers=admin_headers)

        assert forbidden.status_code == status.HTTP_403_FORBIDDEN
        assert allowed.status_code == status.HTTP_200_OK
        assert allowed.json()["deleted"] == 1
