"""
Test Audit Log: login, aktivitas mutasi dan failed login
"""


class TestActivityDescribe:
    """Test pemetaan path ke action / entity"""

    def test_describe_create(self):
        from persuratan.middleware.activity_logger import ActivityLoggingMiddleware
        from persuratan.models.enums import AuditAction, AuditEntity

        middleware = ActivityLoggingMiddleware(app=None)
        action, entity, entity_id, description = middleware.describe("POST", "/api/surat-keluar")

        assert action == AuditAction.CREATE
        assert entity == AuditEntity.SURAT_KELUAR
        assert entity_id is None
        assert description == "Membuat surat keluar"

    def test_describe_update_with_id(self):
        from persuratan.middleware.activity_logger import ActivityLoggingMiddleware
        from persuratan.models.enums import AuditAction, AuditEntity

        surat_id = "6f1c2a8e-1d2b-4c3d-9e8f-0a1b2c3d4e5f"
        middleware = ActivityLoggingMiddleware(app=None)
        action, entity, entity_id, _ = middleware.describe("PUT", f"/api/disposisi/{surat_id}")

        assert action == AuditAction.UPDATE
        assert entity == AuditEntity.DISPOSISI
        assert entity_id == surat_id

    def test_describe_copy_disposisi(self):
        from persuratan.middleware.activity_logger import ActivityLoggingMiddleware
        from persuratan.models.enums import AuditAction, AuditEntity

        surat_id = "6f1c2a8e-1d2b-4c3d-9e8f-0a1b2c3d4e5f"
        middleware = ActivityLoggingMiddleware(app=None)
        action, entity, entity_id, description = middleware.describe(
            "POST", f"/api/surat-masuk/{surat_id}/copy-disposisi"
        )

        assert (action, entity, entity_id) == (AuditAction.CREATE, AuditEntity.DISPOSISI, surat_id)
        assert description == "Menyalin surat masuk ke disposisi"


class TestAuditLogEndpoints:
    """Test GET /api/audit-logs"""

    def test_login_recorded(self, admin_client, admin_user):
        logs = admin_client.get("/api/audit-logs", params={"action": "LOGIN"}).json()["items"]

        assert len(logs) == 1
        assert logs[0]["userId"] == admin_user["id"]
        assert logs[0]["isSuccess"] is True

    def test_mutation_recorded(self, admin_client, create_surat_masuk):
        create_surat_masuk()

        response = admin_client.get("/api/audit-logs", params={"entity": "SuratMasuk", "action": "CREATE"})

        logs = response.json()["items"]
        assert len(logs) == 1
        assert logs[0]["details"] == "Membuat surat masuk"
        assert logs[0]["method"] == "POST"
        assert logs[0]["responseStatus"] == 201

    def test_failed_mutation_recorded_with_status(self, admin_client, create_surat_masuk, sample_surat_masuk_data):
        create_surat_masuk()
        admin_client.post("/api/surat-masuk", json=sample_surat_masuk_data)

        logs = admin_client.get(
            "/api/audit-logs", params={"entity": "SuratMasuk", "action": "CREATE"}
        ).json()["items"]

        assert sorted(log["responseStatus"] for log in logs) == [201, 400]
        assert [log["isSuccess"] for log in logs if log["responseStatus"] == 400] == [False]

    def test_rejected_update_marked_failed(self, admin_client):
        missing_id = "6f1c2a8e-1d2b-4c3d-9e8f-0a1b2c3d4e5f"
        response = admin_client.put(f"/api/surat-masuk/{missing_id}", json={"perihal": "Revisi"})
        assert response.status_code == 404

        logs = admin_client.get(
            "/api/audit-logs", params={"entity": "SuratMasuk", "action": "UPDATE"}
        ).json()["items"]

        assert len(logs) == 1
        assert logs[0]["entityId"] == missing_id
        assert logs[0]["responseStatus"] == 404
        assert logs[0]["isSuccess"] is False

    def test_get_requests_not_recorded(self, admin_client):
        admin_client.get("/api/surat-masuk")

        logs = admin_client.get("/api/audit-logs", params={"entity": "SuratMasuk"}).json()["items"]

        assert logs == []

    def test_failed_logins(self, admin_client, test_client, admin_user):
        for _ in range(2):
            test_client.post("/api/auth/login", json={"email": admin_user["email"], "password": "salah"})

        response = admin_client.get("/api/audit-logs/failed-logins", params={"hours": 1})

        assert response.status_code == 200
        logs = response.json()
        assert len(logs) == 2
        assert all(log["action"] == "FAILED_LOGIN" for log in logs)
        assert all(log["isSuccess"] is False for log in logs)
        assert "@" in logs[0]["details"]

    def test_search(self, admin_client, create_surat_masuk):
        create_surat_masuk()

        logs = admin_client.get("/api/audit-logs", params={"search": "membuat surat"}).json()["items"]

        assert len(logs) == 1

    def test_member_forbidden(self, member_client):
        assert member_client.get("/api/audit-logs").status_code == 403
