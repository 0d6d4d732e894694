from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordVerifier(Protocol):
    def hash(self, plaintext: str) -> str:
        ...

    def verify(self, plaintext: str, stored_digest: str) -> bool:
        ...


class Sha256PasswordVerifier:
    """
    Unsalted SHA-256 over UTF-8 bytes, base64-encoded.

    Identical passwords produce identical digests for every user. Existing
    userLogins.json files depend on this exact format, so a salted scheme
    has to come in as a separate PasswordVerifier plus a credential rewrite.
    """

    def hash(self, plaintext: str) -> str:
        digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("ascii")

    def verify(self, plaintext: str, stored_digest: str) -> bool:
        return hmac.compare_digest(self.hash(plaintext), str(stored_digest or ""))
