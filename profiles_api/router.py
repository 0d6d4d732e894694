"""
profiles_api/router.py

Profile endpoints:
    GET   /api
    GET   /api/users/{username}            unconditional fetch
    PUT   /api/users/{username}            conditional fetch (password gate)
    POST  /api/users/{username}            register
    PATCH /api/users/{username}/settings   replace the stored record

Store and verifier come from app.state (set by main.create_app).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Request

from .access import (
    PasswordRequired,
    ProfileAlreadyExists,
    ReservedUsername,
    find_index,
    find_record,
    require_valid_access,
)
from .models import (
    FetchRequest,
    MessageResponse,
    RegisterRequest,
    UpdateSettingsRequest,
    UserCredential,
    default_profile,
    record_username,
)
from .passwords import PasswordVerifier
from .store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["profiles"])


def _store_from_request(request: Request) -> RecordStore:
    return request.app.state.store


def _verifier_from_request(request: Request) -> PasswordVerifier:
    return request.app.state.verifier


def _is_reserved(request: Request, username: str) -> bool:
    reserved = getattr(request.app.state, "reserved_names", None) or set()
    return username.strip().lower() in reserved


# ----------------------------
# Health
# ----------------------------

@router.get("", response_model=MessageResponse)
def api_online() -> Dict[str, Any]:
    return {"message": "API is online"}


# ----------------------------
# Fetch
# ----------------------------

@router.get("/users/{username}")
def get_profile(request: Request, username: str) -> Dict[str, Any]:
    store = _store_from_request(request)
    profile = find_record(store.load_profiles(), username)
    return require_valid_access(
        username=username,
        profile=profile,
        password=None,
        bypass=True,
        load_credentials=store.load_credentials,
        verifier=_verifier_from_request(request),
    )


@router.put("/users/{username}")
def fetch_profile(
    request: Request,
    username: str,
    body: Optional[FetchRequest] = Body(default=None),
) -> Dict[str, Any]:
    body = body or FetchRequest()
    store = _store_from_request(request)
    profile = find_record(store.load_profiles(), username)
    return require_valid_access(
        username=username,
        profile=profile,
        password=body.password,
        bypass=body.noLogin,
        load_credentials=store.load_credentials,
        verifier=_verifier_from_request(request),
    )


# ----------------------------
# Register
# ----------------------------

@router.post("/users/{username}")
def register_profile(
    request: Request,
    username: str,
    body: Optional[RegisterRequest] = Body(default=None),
) -> Dict[str, Any]:
    body = body or RegisterRequest()
    store = _store_from_request(request)
    verifier = _verifier_from_request(request)

    with store.transaction():
        profiles = store.load_profiles()
        if find_record(profiles, username) is not None:
            raise ProfileAlreadyExists(username)

        if _is_reserved(request, username):
            raise ReservedUsername(username)

        profile = default_profile(username)

        if body.protectAccount:
            if not body.password:
                raise PasswordRequired(username, f'A password is required to protect Twitch username "{username}"')

            profile.isProtected = True
            credentials = [c for c in store.load_credentials() if record_username(c) != username]
            credentials.append(UserCredential(username=username, passwordHash=verifier.hash(body.password)).to_record())
            # Credential first: a failed profile write leaves an unreachable credential,
            # never a protected profile without one.
            store.save_credentials(credentials)

        record = profile.to_record()
        profiles.append(record)
        store.save_profiles(profiles)

    logger.info("Registered profile %r (protected=%s)", username, record["isProtected"])
    return record


# ----------------------------
# Settings
# ----------------------------

@router.patch("/users/{username}/settings")
def update_settings(
    request: Request,
    username: str,
    body: UpdateSettingsRequest,
) -> Dict[str, Any]:
    store = _store_from_request(request)

    with store.transaction():
        profiles = store.load_profiles()
        idx = find_index(profiles, username)
        require_valid_access(
            username=username,
            profile=profiles[idx] if idx is not None else None,
            password=body.password,
            bypass=False,
            load_credentials=store.load_credentials,
            verifier=_verifier_from_request(request),
        )

        new_record = body.settings
        new_username = record_username(new_record)
        if new_username != username:
            # Stored as sent; the record is re-keyed under the new name (or none).
            logger.warning("Settings for %r replaced with a record keyed %r", username, new_username)

        profiles[idx] = new_record
        store.save_profiles(profiles)

    logger.info("Replaced settings for profile %r", username)
    return new_record
