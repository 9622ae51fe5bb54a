"""
Test Authentication and CSRF Endpoints
"""


class TestLogin:
    """Test POST /api/auth/login"""

    def test_login_success(self, test_client, admin_user):
        response = test_client.post(
            "/api/auth/login", json={"email": admin_user["email"], "password": admin_user["password"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"
        assert data["accessToken"]
        assert data["user"]["role"] == "ADMIN"
        assert data["user"]["roleDisplay"] == "Administrator"
        assert "access_token" in response.cookies

    def test_login_email_case_insensitive(self, test_client, admin_user):
        response = test_client.post(
            "/api/auth/login", json={"email": admin_user["email"].upper(), "password": admin_user["password"]}
        )

        assert response.status_code == 200

    def test_login_wrong_password(self, test_client, admin_user):
        response = test_client.post(
            "/api/auth/login", json={"email": admin_user["email"], "password": "salah"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Email atau password salah"}

    def test_login_unknown_email(self, test_client, db):
        response = test_client.post(
            "/api/auth/login", json={"email": "tidak.ada@dprd-kalsel.go.id", "password": "apapun"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Email atau password salah"

    def test_login_inactive_user(self, test_client, inactive_user):
        response = test_client.post(
            "/api/auth/login", json={"email": "nonaktif@dprd-kalsel.go.id", "password": "Nonaktif#2025"}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Akun pengguna tidak aktif"

    def test_login_missing_field(self, test_client, db):
        response = test_client.post("/api/auth/login", json={"email": "admin@dprd-kalsel.go.id"})

        assert response.status_code == 400
        assert "error" in response.json()


class TestSession:
    """Test /me dan logout"""

    def test_me(self, admin_client, admin_user):
        response = admin_client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["email"] == admin_user["email"]

    def test_me_without_login(self, test_client):
        response = test_client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_logout(self, admin_client):
        response = admin_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logout berhasil"}
        assert admin_client.get("/api/auth/me").status_code == 401


class TestCsrf:
    """Test double submit CSRF"""

    def test_get_csrf_token(self, test_client):
        response = test_client.get("/api/csrf-token")

        assert response.status_code == 200
        token = response.json()["csrfToken"]
        assert len(token) == 64
        assert response.cookies.get("csrf-token") == token

    def test_csrf_token_reused(self, test_client):
        first = test_client.get("/api/csrf-token").json()["csrfToken"]
        second = test_client.get("/api/csrf-token").json()["csrfToken"]

        assert first == second

    def test_mutation_without_csrf_header_rejected(self, admin_client, sample_surat_masuk_data):
        admin_client.headers.pop("x-csrf-token")

        response = admin_client.post("/api/surat-masuk", json=sample_surat_masuk_data)

        assert response.status_code == 403
        assert response.json() == {"error": "Invalid CSRF token"}

    def test_mutation_with_wrong_csrf_header_rejected(self, admin_client, sample_surat_masuk_data):
        admin_client.headers["x-csrf-token"] = "0" * 64

        response = admin_client.post("/api/surat-masuk", json=sample_surat_masuk_data)

        assert response.status_code == 403

    def test_unauthenticated_mutation_gets_401(self, test_client, sample_surat_masuk_data):
        response = test_client.post("/api/surat-masuk", json=sample_surat_masuk_data)

        assert response.status_code == 401


class TestRoles:
    """Test pembatasan role"""

    def test_member_cannot_access_surat_masuk(self, member_client):
        response = member_client.get("/api/surat-masuk")

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden - Admin only"}

    def test_admin_cannot_create_surat_tamu(self, admin_client):
        response = admin_client.post("/api/surat-tamu", json={
            "noUrut": 1, "nama": "Budi", "keperluan": "Audiensi",
            "asalSurat": "LSM", "tujuanSurat": "Ketua DPRD", "tanggal": "2025-01-06",
        })

        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden - Member only"}

    def test_both_roles_can_login(self, test_client, admin_user, member_user, login_as):
        admin = login_as(test_client, admin_user["email"], admin_user["password"])
        member = login_as(test_client, member_user["email"], member_user["password"])

        assert admin["user"]["role"] == "ADMIN"
        assert member["user"]["role"] == "MEMBER"


class TestSystemEndpoints:
    """Test root, health dan security headers"""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_security_headers(self, test_client):
        response = test_client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
