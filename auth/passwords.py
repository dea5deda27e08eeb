"""
auth/passwords.py -- Password hashing and constant-time credential checks.

bcrypt is used directly (no passlib wrapper): passlib's wrap-bug detection
builds a password longer than 72 bytes, which bcrypt 4.x rejects. bcrypt only
looks at the first 72 bytes of input, so the signup route rejects longer
passwords before they reach hash().

verify() never raises. A malformed digest reads as a mismatch so callers
cannot tell a corrupt row from a wrong password.

Layer rule: no imports from api/, web/, or catalog/.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import bcrypt

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("furnishare.auth")

MAX_PASSWORD_BYTES = 72


class HashingError(Exception):
    """bcrypt could not produce a digest (bad input, RNG or allocation failure)."""


class PasswordHasher:
    """bcrypt hasher with a fixed work factor.

    One instance is built by create_app() from Settings.bcrypt_rounds and
    shared read-only across request threads.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        # Timing equalization dummy [T1]. Computed once so the first login
        # for an unknown email is not measurably faster than later ones.
        self._dummy_hash = self.hash("furnishare_timing_dummy")

    def hash(self, plain: str) -> str:
        """Return a salted bcrypt digest of plain."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")
        except Exception as exc:
            raise HashingError("password hashing failed") from exc

    def verify(self, hashed: str, plain: str) -> bool:
        """Return True if plain matches the bcrypt digest."""
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
        except Exception:
            return False

    def burn(self, plain: str) -> None:
        """Spend one verify() worth of CPU against the dummy digest."""
        self.verify(self._dummy_hash, plain)


def authenticate_user(store: UserStore, hasher: PasswordHasher, email: str, password: str) -> User | None:
    """Check an email/password pair with timing equalization [T1].

    bcrypt always runs, whether or not the email exists:
    - Unknown email: bcrypt runs against the dummy digest (same cost)
    - Wrong password: bcrypt runs against the stored digest (same cost)

    Returns the User on success, None on any failure. Store errors propagate.
    """
    user = store.get_by_email(email)
    if user is None or not user.hashed_password:
        # Do NOT return before running bcrypt [T1]
        hasher.burn(password)
        return None
    if not hasher.verify(user.hashed_password, password):
        return None
    return user
