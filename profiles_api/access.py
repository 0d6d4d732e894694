"""
profiles_api/access.py

Error taxonomy and the shared access gate for protected profiles.

Gate order (fetch and settings update both go through require_valid_access):
  1. profile must exist                       -> 404
  2. unprotected, or caller bypasses          -> allowed
  3. password must be supplied                -> 401
  4. a credential must be on file             -> 500 (inconsistent record)
  5. password digest must match the credential -> 403
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .models import record_username
from .passwords import PasswordVerifier
from .store import Record

logger = logging.getLogger(__name__)


# ----------------------------
# Errors
# ----------------------------

class ProfileError(Exception):
    """Base for user-facing errors; rendered as {"message": ...} with status_code."""

    status_code: int = 500

    def __init__(self, username: str, message: str) -> None:
        super().__init__(message)
        self.username = username
        self.message = message


class ProfileNotFound(ProfileError):
    status_code = 404

    def __init__(self, username: str) -> None:
        super().__init__(username, f'Twitch username "{username}" isn\'t registered')


class ProfileAlreadyExists(ProfileError):
    status_code = 403

    def __init__(self, username: str) -> None:
        super().__init__(username, f'Twitch username "{username}" is already registered')


class ReservedUsername(ProfileError):
    status_code = 403

    def __init__(self, username: str) -> None:
        super().__init__(username, f'Twitch username "{username}" is reserved')


class PasswordRequired(ProfileError):
    status_code = 401

    def __init__(self, username: str, message: Optional[str] = None) -> None:
        super().__init__(username, message or f'Twitch username "{username}" is password protected')


class IncorrectPassword(ProfileError):
    status_code = 403

    def __init__(self, username: str) -> None:
        super().__init__(username, f'Incorrect password for Twitch username "{username}"')


class CredentialMissing(ProfileError):
    status_code = 500

    def __init__(self, username: str) -> None:
        super().__init__(
            username,
            f'Twitch username "{username}" requires a password, but has no password stored',
        )


# ----------------------------
# Lookups
# ----------------------------

def find_index(records: List[Record], username: str) -> Optional[int]:
    for i, record in enumerate(records):
        if record_username(record) == username:
            return i
    return None


def find_record(records: List[Record], username: str) -> Optional[Record]:
    idx = find_index(records, username)
    return records[idx] if idx is not None else None


def is_protected(profile: Dict[str, Any]) -> bool:
    return bool(profile.get("isProtected"))


# ----------------------------
# Gate
# ----------------------------

def require_valid_access(
    *,
    username: str,
    profile: Optional[Record],
    password: Optional[str],
    bypass: bool,
    load_credentials: Callable[[], List[Record]],
    verifier: PasswordVerifier,
) -> Record:
    """
    Return the profile if the caller may read or replace it, else raise.

    `load_credentials` is only called for protected profiles without a
    bypass and with a password supplied.
    """
    if profile is None:
        raise ProfileNotFound(username)

    if not is_protected(profile) or bypass:
        return profile

    if not password:
        raise PasswordRequired(username)

    credential = find_record(load_credentials(), username)
    if credential is None:
        logger.error("Profile %r is protected but has no credential on file", username)
        raise CredentialMissing(username)

    if not verifier.verify(password, credential.get("passwordHash", "")):
        raise IncorrectPassword(username)

    return profile
