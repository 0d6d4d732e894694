"""Chat profile settings API.

Contract:
- Profiles and credentials persist as two flat JSON arrays (PROFILES_DATA_DIR).
- Every request re-reads the full collection; every mutation rewrites it.
- Protected profiles require a password unless the caller bypasses (fetch only).
- Password digests are unsalted base64 SHA-256 (kept for compatibility).
"""
from __future__ import annotations

__version__ = "1.0.0"
