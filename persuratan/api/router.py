"""API router configuration."""

from fastapi import APIRouter

from persuratan.api.endpoints import (
    auth, csrf, users, surat_masuk, disposisi, surat_keluar,
    surat_tamu, audit_logs, dashboard, tujuan
)

# Create main API router
api_router = APIRouter()

COMMON_RESPONSES = {
    401: {"description": "Unauthorized"},
    403: {"description": "Forbidden"},
}

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    responses=COMMON_RESPONSES,
)

api_router.include_router(csrf.router, tags=["Security"])

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["User Management"],
    responses={**COMMON_RESPONSES, 404: {"description": "User not found"}},
)

# ===== PERSURATAN =====

api_router.include_router(
    surat_masuk.router,
    prefix="/surat-masuk",
    tags=["Surat Masuk"],
    responses={**COMMON_RESPONSES, 404: {"description": "Surat not found"}},
)

api_router.include_router(
    disposisi.router,
    prefix="/disposisi",
    tags=["Disposisi"],
    responses={**COMMON_RESPONSES, 404: {"description": "Disposisi not found"}},
)

api_router.include_router(
    surat_keluar.router,
    prefix="/surat-keluar",
    tags=["Surat Keluar"],
    responses={**COMMON_RESPONSES, 404: {"description": "Surat keluar not found"}},
)

api_router.include_router(
    surat_tamu.router,
    prefix="/surat-tamu",
    tags=["Surat Tamu"],
    responses={**COMMON_RESPONSES, 404: {"description": "Surat tamu not found"}},
)

api_router.include_router(tujuan.router, tags=["Disposisi"])

# ===== ADMIN =====

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
    responses=COMMON_RESPONSES,
)

api_router.include_router(
    audit_logs.router,
    prefix="/audit-logs",
    tags=["Audit Log"],
    responses=COMMON_RESPONSES,
)
