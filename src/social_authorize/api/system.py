from __future__ import annotations

from fastapi import APIRouter

from social_authorize.settings import get_settings


router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> dict:
    return {"status": "healthy", "service": "social-authorize", "version": get_settings().app_version}


@router.get("/")
async def index() -> dict:
    return {"service": "social-authorize", "login": "/auth/login", "me": "/auth/me", "friends": "/auth/friends"}
