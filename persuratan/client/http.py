"""Async HTTP client untuk API persuratan dengan CSRF otomatis."""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from persuratan.client.exceptions import ApiError
from persuratan.client.query import ListQuery
from persuratan.client.role_gate import AuthContext

logger = logging.getLogger(__name__)

CSRF_HEADER = "x-csrf-token"
INVALID_CSRF = "Invalid CSRF token"
MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

Params = Union[ListQuery, Mapping[str, Any], None]


def _params(query: Params) -> Dict[str, Any]:
    if query is None:
        return {}
    if isinstance(query, ListQuery):
        return query.to_params()
    return {key: value for key, value in query.items() if value not in (None, "")}


def _error_from(response: httpx.Response) -> ApiError:
    message = ""
    details: List[Any] = []
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message") or ""
        details = body.get("details") or []
    if not message:
        return ApiError(response.status_code, f"HTTP {response.status_code}", details, from_server=False)
    return ApiError(response.status_code, message, details)


class PersuratanClient:
    """
    Wrapper ``httpx.AsyncClient``.

    Token CSRF diambil sekali dari ``GET /api/csrf-token`` lalu di-cache.
    Kalau server menolak dengan ``Invalid CSRF token``, token diambil ulang
    dan request diulang satu kali.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        api_prefix: str = "/api",
        timeout: float = 30.0,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self._csrf_token: Optional[str] = None
        self.auth = AuthContext.anonymous()

    async def __aenter__(self) -> "PersuratanClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.api_prefix}{path}"

    # ===== CSRF =====

    async def get_csrf_token(self, refresh: bool = False) -> str:
        if self._csrf_token and not refresh:
            return self._csrf_token
        response = await self._client.get(self._url("/csrf-token"))
        if response.is_error:
            raise _error_from(response)
        self._csrf_token = response.json()["csrfToken"]
        return self._csrf_token

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        method = method.upper()
        if method not in MUTATING_METHODS:
            response = await self._client.request(method, self._url(path), **kwargs)
        else:
            response = await self._send_with_csrf(method, path, refresh=False, **kwargs)
            if response.status_code == 403 and _error_from(response).message == INVALID_CSRF:
                logger.info("CSRF token rejected, refreshing and retrying once")
                response = await self._send_with_csrf(method, path, refresh=True, **kwargs)

        if response.is_error:
            raise _error_from(response)
        return response

    async def _send_with_csrf(self, method: str, path: str, refresh: bool, **kwargs) -> httpx.Response:
        token = await self.get_csrf_token(refresh=refresh)
        headers = dict(kwargs.pop("headers", None) or {})
        headers[CSRF_HEADER] = token
        return await self._client.request(method, self._url(path), headers=headers, **kwargs)

    async def _json(self, method: str, path: str, **kwargs) -> Any:
        return (await self.request(method, path, **kwargs)).json()

    # ===== AUTH =====

    async def login(self, email: str, password: str) -> AuthContext:
        data = await self._json("POST", "/auth/login", json={"email": email, "password": password})
        self._client.headers["Authorization"] = f"Bearer {data['accessToken']}"
        self.auth = AuthContext.for_user(data["user"])
        return self.auth

    async def logout(self) -> AuthContext:
        try:
            await self.request("POST", "/auth/logout")
        finally:
            self._client.headers.pop("Authorization", None)
            self._client.cookies.clear()
            self._csrf_token = None
            self.auth = AuthContext.anonymous()
        return self.auth

    async def me(self) -> Dict[str, Any]:
        return await self._json("GET", "/auth/me")

    # ===== SURAT MASUK =====

    async def list_surat_masuk(self, query: Params = None) -> Dict[str, Any]:
        return await self._json("GET", "/surat-masuk", params=_params(query))

    async def get_surat_masuk(self, surat_id: str) -> Dict[str, Any]:
        return await self._json("GET", f"/surat-masuk/{surat_id}")

    async def create_surat_masuk(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("POST", "/surat-masuk", json=dict(data))

    async def update_surat_masuk(self, surat_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("PUT", f"/surat-masuk/{surat_id}", json=dict(data))

    async def delete_surat_masuk(self, surat_id: str) -> Dict[str, Any]:
        return await self._json("DELETE", f"/surat-masuk/{surat_id}")

    async def copy_to_disposisi(
        self,
        surat_id: str,
        tujuan_disposisi: str,
        tanggal_disposisi: Union[date, str],
        keterangan: Optional[str] = None,
    ) -> Dict[str, Any]:
        if isinstance(tanggal_disposisi, date):
            tanggal_disposisi = tanggal_disposisi.isoformat()
        payload = {
            "tujuanDisposisi": tujuan_disposisi,
            "tanggalDisposisi": tanggal_disposisi,
            "keterangan": keterangan,
        }
        return await self._json("POST", f"/surat-masuk/{surat_id}/copy-disposisi", json=payload)

    async def export_surat_masuk(self) -> bytes:
        return (await self.request("GET", "/surat-masuk/export")).content

    # ===== DISPOSISI =====

    async def list_disposisi(self, query: Params = None) -> Dict[str, Any]:
        return await self._json("GET", "/disposisi", params=_params(query))

    async def get_disposisi(self, disposisi_id: str) -> Dict[str, Any]:
        return await self._json("GET", f"/disposisi/{disposisi_id}")

    async def create_disposisi(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("POST", "/disposisi", json=dict(data))

    async def update_disposisi(self, disposisi_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("PUT", f"/disposisi/{disposisi_id}", json=dict(data))

    async def delete_disposisi(self, disposisi_id: str) -> Dict[str, Any]:
        return await self._json("DELETE", f"/disposisi/{disposisi_id}")

    async def export_disposisi(self) -> bytes:
        return (await self.request("GET", "/disposisi/export")).content

    # ===== SURAT KELUAR =====

    async def list_surat_keluar(self, query: Params = None) -> Dict[str, Any]:
        return await self._json("GET", "/surat-keluar", params=_params(query))

    async def get_surat_keluar(self, surat_id: str) -> Dict[str, Any]:
        return await self._json("GET", f"/surat-keluar/{surat_id}")

    async def create_surat_keluar(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("POST", "/surat-keluar", json=dict(data))

    async def update_surat_keluar(self, surat_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("PUT", f"/surat-keluar/{surat_id}", json=dict(data))

    async def delete_surat_keluar(self, surat_id: str) -> Dict[str, Any]:
        return await self._json("DELETE", f"/surat-keluar/{surat_id}")

    # ===== SURAT TAMU =====

    async def list_surat_tamu(self, query: Params = None) -> Dict[str, Any]:
        return await self._json("GET", "/surat-tamu", params=_params(query))

    async def create_surat_tamu(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("POST", "/surat-tamu", json=dict(data))

    # ===== USERS =====

    async def list_users(self, query: Params = None) -> Dict[str, Any]:
        return await self._json("GET", "/users", params=_params(query))

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        return await self._json("GET", f"/users/{user_id}")

    async def create_user(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("POST", "/users", json=dict(data))

    async def update_user(self, user_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._json("PUT", f"/users/{user_id}", json=dict(data))

    async def delete_user(self, user_id: str) -> Dict[str, Any]:
        return await self._json("DELETE", f"/users/{user_id}")

    # ===== LAINNYA =====

    async def dashboard_stats(self) -> Dict[str, Any]:
        return await self._json("GET", "/dashboard/stats")

    async def tujuan_catalog(self) -> Dict[str, Any]:
        return await self._json("GET", "/tujuan-disposisi")
