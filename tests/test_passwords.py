"""Unit tests for auth/passwords.py -- bcrypt hashing and credential checks.

Covers:
- hash() produces a salted digest that verify() accepts
- verify() returns False (never raises) on mismatch and on malformed digests
- hash() wraps bcrypt failures in HashingError
- authenticate_user() treats unknown email and wrong password identically
"""

import pytest

from auth.models import User
from auth.passwords import HashingError, PasswordHasher, authenticate_user
from auth.store import UserStore


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def store():
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


class TestPasswordHasher:
    def test_hash_then_verify(self, hasher: PasswordHasher) -> None:
        digest = hasher.hash("correct horse")
        assert digest != "correct horse"
        assert hasher.verify(digest, "correct horse") is True

    def test_same_password_gets_distinct_salts(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("repeat-me") != hasher.hash("repeat-me")

    def test_rounds_are_encoded_in_digest(self, hasher: PasswordHasher) -> None:
        assert hasher.hash("pw123456").startswith("$2b$04$")

    def test_wrong_password_is_false(self, hasher: PasswordHasher) -> None:
        digest = hasher.hash("right-password")
        assert hasher.verify(digest, "wrong-password") is False

    @pytest.mark.parametrize("digest", ["", "not-a-bcrypt-hash", "$2b$04$short"])
    def test_malformed_digest_is_false(self, hasher: PasswordHasher, digest: str) -> None:
        """A corrupt stored digest must look exactly like a mismatch."""
        assert hasher.verify(digest, "anything") is False

    def test_bcrypt_failure_raises_hashing_error(self, hasher: PasswordHasher, monkeypatch) -> None:
        def boom(*args, **kwargs):
            raise RuntimeError("entropy source unavailable")

        monkeypatch.setattr("auth.passwords.bcrypt.gensalt", boom)
        with pytest.raises(HashingError):
            hasher.hash("whatever")


class TestAuthenticateUser:
    def test_valid_credentials_return_user(self, store: UserStore, hasher: PasswordHasher) -> None:
        store.create_user(User(email="ann@example.com", name="Ann", hashed_password=hasher.hash("pw-ann-1")))
        user = authenticate_user(store, hasher, "ann@example.com", "pw-ann-1")
        assert user is not None
        assert user.email == "ann@example.com"

    def test_wrong_password_returns_none(self, store: UserStore, hasher: PasswordHasher) -> None:
        store.create_user(User(email="bob@example.com", name="Bob", hashed_password=hasher.hash("pw-bob-1")))
        assert authenticate_user(store, hasher, "bob@example.com", "nope") is None

    def test_unknown_email_still_runs_bcrypt(self, store: UserStore, hasher: PasswordHasher, monkeypatch) -> None:
        """Timing equalization: bcrypt must run even when the email is unknown."""
        calls = []
        real_verify = hasher.verify

        def spy(hashed, plain):
            calls.append(hashed)
            return real_verify(hashed, plain)

        monkeypatch.setattr(hasher, "verify", spy)
        assert authenticate_user(store, hasher, "ghost@example.com", "pw") is None
        assert len(calls) == 1

    def test_email_match_is_case_sensitive(self, store: UserStore, hasher: PasswordHasher) -> None:
        store.create_user(User(email="Case@Example.com", name="C", hashed_password=hasher.hash("pw-case-1")))
        assert authenticate_user(store, hasher, "case@example.com", "pw-case-1") is None
