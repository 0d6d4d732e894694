from __future__ import annotations

from profiles_api.passwords import PasswordVerifier, Sha256PasswordVerifier


def test_hash_is_base64_sha256_of_utf8() -> None:
    verifier = Sha256PasswordVerifier()
    assert verifier.hash("secret") == "K7gNU3sdo+OL0wNhqoVWhr3g6s1xYv72ol/pe/Unols="


def test_hash_is_deterministic_and_unsalted() -> None:
    verifier = Sha256PasswordVerifier()
    # Same password for two different users yields the same digest.
    assert verifier.hash("hunter2") == verifier.hash("hunter2")
    assert verifier.hash("hunter2") != verifier.hash("hunter3")


def test_verify_matches_only_exact_digest() -> None:
    verifier = Sha256PasswordVerifier()
    stored = verifier.hash("pässwörd")
    assert verifier.verify("pässwörd", stored) is True
    assert verifier.verify("passwort", stored) is False
    assert verifier.verify("pässwörd", "") is False


def test_sha256_verifier_satisfies_protocol() -> None:
    assert isinstance(Sha256PasswordVerifier(), PasswordVerifier)
