from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


# ----------------------------
# Env helpers
# ----------------------------

def _str_env(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    return raw if raw else default


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _list_env(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _optional_env(name: str) -> Optional[str]:
    v = (os.getenv(name) or "").strip()
    return v if v else None


# ----------------------------
# Settings
# ----------------------------

@dataclass
class Settings:
    data_dir: Path = Path("data")
    public_dir: Path = Path("public")
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    reserved_names: List[str] = field(default_factory=list)

    host: str = "0.0.0.0"
    port: int = 443
    ssl_keyfile: Optional[str] = None
    ssl_certfile: Optional[str] = None

    log_level: str = "INFO"

    @property
    def profiles_path(self) -> Path:
        return self.data_dir / "userData.json"

    @property
    def credentials_path(self) -> Path:
        return self.data_dir / "userLogins.json"

    @property
    def tls_enabled(self) -> bool:
        return bool(self.ssl_keyfile and self.ssl_certfile)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(_str_env("PROFILES_DATA_DIR", "data")),
            public_dir=Path(_str_env("PROFILES_PUBLIC_DIR", "public")),
            cors_origins=_list_env("PROFILES_CORS_ORIGINS", ["*"]),
            reserved_names=_list_env("PROFILES_RESERVED_NAMES", []),
            host=_str_env("PROFILES_HOST", "0.0.0.0"),
            port=_int_env("PROFILES_PORT", 443),
            ssl_keyfile=_optional_env("PROFILES_SSL_KEYFILE"),
            ssl_certfile=_optional_env("PROFILES_SSL_CERTFILE"),
            log_level=_str_env("PROFILES_LOG_LEVEL", "INFO").upper(),
        )
