from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CHAT_COLOR = "#ff0000"

# On-disk / wire key for the username of both profiles and credentials.
USERNAME_KEY = "twitchUsername"


# ----------------------------
# Stored records
# ----------------------------

class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., alias=USERNAME_KEY)
    nickname: str = ""
    chatColor: str = DEFAULT_CHAT_COLOR
    randomChatColor: bool = True
    isProtected: bool = False
    history: List[str] = Field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class UserCredential(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., alias=USERNAME_KEY)
    passwordHash: str

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def default_profile(username: str) -> UserProfile:
    """Fresh default record; never shared between registrations."""
    return UserProfile(username=username)


def record_username(record: Any) -> Optional[str]:
    """Username of a stored record, accepting either key spelling."""
    if not isinstance(record, dict):
        return None
    value = record.get(USERNAME_KEY, record.get("username"))
    return value if isinstance(value, str) else None


# ----------------------------
# Request bodies
# ----------------------------

class FetchRequest(BaseModel):
    noLogin: bool = False
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    protectAccount: bool = False
    password: Optional[str] = None


class UpdateSettingsRequest(BaseModel):
    # Stored verbatim: no field validation beyond "an object was sent".
    settings: Dict[str, Any]
    password: Optional[str] = None


# ----------------------------
# Responses
# ----------------------------

class MessageResponse(BaseModel):
    message: str
