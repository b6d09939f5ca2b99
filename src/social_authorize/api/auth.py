from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from social_authorize.security import generate_state
from social_authorize.exceptions import AuthenticationError
from social_authorize.sessions import DictSession
from social_authorize.settings import get_settings
from social_authorize.strategies import GoogleStrategy
from social_authorize.strategies.google import STATE_KEY


router = APIRouter(prefix="/auth", tags=["auth"])

# Session keys
TOKEN_KEY = "google_token"


def build_strategy(request: Request, state: Optional[str] = None) -> GoogleStrategy:
    s = get_settings()
    return GoogleStrategy(
        s.google.strategy_settings(state=state),
        DictSession(request.session),
        google=s.google,
    )


def get_strategy(request: Request) -> GoogleStrategy:
    return build_strategy(request)


def _session_token(request: Request) -> Dict[str, Any]:
    token = request.session.get(TOKEN_KEY)
    if not token:
        raise AuthenticationError("No access token in session", error="login_required")
    return token


@router.get("/login")
async def login(request: Request):
    strategy = build_strategy(request, state=generate_state())
    return strategy.login()


@router.get("/callback")
async def callback(request: Request, strategy: GoogleStrategy = Depends(get_strategy)):
    # Provider sign-in error
    if "error" in request.query_params:
        raise HTTPException(
            status_code=400,
            detail={
                "error": request.query_params.get("error"),
                "error_description": request.query_params.get("error_description"),
            },
        )

    state_param = request.query_params.get("state")
    if not state_param or state_param != request.session.get(STATE_KEY):
        raise HTTPException(status_code=400, detail="Invalid state (check session cookie)")

    params = {key: request.query_params.get(key) for key in strategy.expects()}
    if not params.get("code"):
        raise HTTPException(status_code=400, detail="Missing authorization code")

    credential = await strategy.resolve_credential(params)
    user = await strategy.get_user({"access_token": credential.as_bundle()})

    request.session.pop(STATE_KEY, None)
    request.session[TOKEN_KEY] = credential.as_bundle()
    return asdict(user)


@router.get("/me")
async def me(request: Request, strategy: GoogleStrategy = Depends(get_strategy)) -> Dict[str, Any]:
    user = await strategy.get_user({"access_token": _session_token(request)})
    return asdict(user)


@router.get("/friends")
async def friends(request: Request, strategy: GoogleStrategy = Depends(get_strategy)) -> List[Dict[str, Any]]:
    contacts = await strategy.get_friends({"access_token": _session_token(request)})
    return [asdict(contact) for contact in contacts]


@router.post("/logout")
@router.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/")
