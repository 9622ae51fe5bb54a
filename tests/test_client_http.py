"""
Test PersuratanClient dengan httpx.MockTransport
"""
import json

import httpx
import pytest

LOGIN_BODY = {
    "accessToken": "jwt-token",
    "tokenType": "bearer",
    "expiresIn": 86400,
    "user": {"id": "u1", "name": "Petugas", "email": "admin@dprd-kalsel.go.id", "role": "ADMIN", "roleDisplay": "Administrator"},
}


class FakeServer:
    """Handler MockTransport yang menolak token CSRF lama satu kali."""

    def __init__(self, reject_first_csrf=False):
        self.requests = []
        self.csrf_issued = 0
        self.reject_first_csrf = reject_first_csrf

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path

        if path == "/api/csrf-token":
            self.csrf_issued += 1
            return httpx.Response(200, json={"csrfToken": f"token-{self.csrf_issued}"})

        if request.method in ("POST", "PUT", "DELETE"):
            token = request.headers.get("x-csrf-token")
            if not token or (self.reject_first_csrf and token == "token-1"):
                return httpx.Response(403, json={"error": "Invalid CSRF token"})

        if path == "/api/auth/login":
            return httpx.Response(200, json=LOGIN_BODY)
        if path == "/api/auth/logout":
            return httpx.Response(200, json={"message": "Logout berhasil"})
        if path == "/api/surat-masuk" and request.method == "GET":
            return httpx.Response(200, json={
                "items": [],
                "pagination": {"total": 0, "page": 1, "limit": 10, "totalPages": 0},
            })
        if path.endswith("/copy-disposisi"):
            return httpx.Response(201, json={"message": "Disposisi berhasil dibuat dari surat masuk"})
        if path == "/api/surat-masuk/missing":
            return httpx.Response(404, json={"error": "Surat tidak ditemukan"})
        if path == "/api/users":
            return httpx.Response(400, json={
                "error": "Password tidak memenuhi persyaratan keamanan",
                "details": ["Password minimal 8 karakter"],
            })
        return httpx.Response(404, json={"error": "Not Found"})


def make_client(server):
    from persuratan.client.http import PersuratanClient

    return PersuratanClient("http://testserver", transport=httpx.MockTransport(server))


class TestPersuratanClient:
    """Test CSRF, auth dan error mapping"""

    async def test_login_sets_auth_context(self):
        server = FakeServer()

        async with make_client(server) as client:
            auth = await client.login("admin@dprd-kalsel.go.id", "rahasia")

            assert auth.is_authenticated is True
            assert auth.role == "ADMIN"
            assert client.auth is auth

        login_request = server.requests[-1]
        assert login_request.headers["x-csrf-token"] == "token-1"

    async def test_authorization_header_after_login(self):
        server = FakeServer()

        async with make_client(server) as client:
            await client.login("admin@dprd-kalsel.go.id", "rahasia")
            await client.list_surat_masuk()

        assert server.requests[-1].headers["Authorization"] == "Bearer jwt-token"

    async def test_csrf_token_cached(self):
        server = FakeServer()

        async with make_client(server) as client:
            await client.login("admin@dprd-kalsel.go.id", "rahasia")
            await client.copy_to_disposisi("s1", "SEKWAN", "2025-01-10")

        assert server.csrf_issued == 1

    async def test_get_does_not_fetch_csrf(self):
        server = FakeServer()

        async with make_client(server) as client:
            await client.list_surat_masuk()

        assert server.csrf_issued == 0
        assert "x-csrf-token" not in server.requests[0].headers

    async def test_invalid_csrf_retried_once(self):
        server = FakeServer(reject_first_csrf=True)

        async with make_client(server) as client:
            result = await client.copy_to_disposisi("s1", "SEKWAN", "2025-01-10")

        assert result["message"] == "Disposisi berhasil dibuat dari surat masuk"
        assert server.csrf_issued == 2
        posts = [r for r in server.requests if r.method == "POST"]
        assert [r.headers["x-csrf-token"] for r in posts] == ["token-1", "token-2"]

    async def test_copy_payload(self):
        from datetime import date

        server = FakeServer()

        async with make_client(server) as client:
            await client.copy_to_disposisi("s1", "Wakil - Wakil I", date(2025, 1, 10), keterangan="Segera")

        body = json.loads(server.requests[-1].content)
        assert body == {
            "tujuanDisposisi": "Wakil - Wakil I",
            "tanggalDisposisi": "2025-01-10",
            "keterangan": "Segera",
        }
        assert server.requests[-1].url.path == "/api/surat-masuk/s1/copy-disposisi"

    async def test_list_uses_query_params(self):
        from persuratan.client.query import ListQuery

        server = FakeServer()

        async with make_client(server) as client:
            await client.list_surat_masuk(ListQuery(search="rapat", search_field="perihal", page=2))

        params = dict(server.requests[-1].url.params)
        assert params == {"page": "2", "limit": "10", "search": "rapat", "searchField": "perihal"}

    async def test_error_message_from_body(self):
        from persuratan.client.exceptions import ApiError

        server = FakeServer()

        async with make_client(server) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.get_surat_masuk("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Surat tidak ditemukan"

    async def test_error_details_from_body(self):
        from persuratan.client.exceptions import ApiError

        server = FakeServer()

        async with make_client(server) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.create_user({"name": "X", "email": "x@dprd-kalsel.go.id", "password": "abc"})

        assert exc_info.value.details == ["Password minimal 8 karakter"]

    async def test_logout_clears_state(self):
        server = FakeServer()

        async with make_client(server) as client:
            await client.login("admin@dprd-kalsel.go.id", "rahasia")
            auth = await client.logout()
            await client.list_surat_masuk()

        assert auth.is_authenticated is False
        assert "Authorization" not in server.requests[-1].headers

    async def test_error_without_body_message(self):
        from persuratan.client.exceptions import ApiError

        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.list_surat_masuk()

        assert exc_info.value.message == "HTTP 502"
        assert exc_info.value.from_server is False
