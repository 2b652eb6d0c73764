"""User email address.

Addresses are stored in one canonical form (trimmed, lower-cased) and
compared by exact equality of that form; lookups never fold case on the
database side.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from warden_identity.exceptions import InvalidEmailError

_ADDRESS = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$")


@dataclass(frozen=True)
class Email:
    """A canonical email address.

    Build one with ``Email.parse``; the constructor only accepts an
    address that is already canonical.
    """

    address: str

    def __post_init__(self) -> None:
        if not self.address:
            raise InvalidEmailError("Email cannot be empty")
        if self.address != self.canonical(self.address):
            raise InvalidEmailError(f"Email is not canonical: {self.address!r}")
        if not _ADDRESS.match(self.address):
            raise InvalidEmailError(f"Invalid email format: {self.address}")

    @staticmethod
    def canonical(raw: str) -> str:
        """Return the stored form of ``raw`` without validating it."""
        return raw.strip().lower()

    @classmethod
    def parse(cls, raw: str) -> Email:
        """Canonicalize and validate user input.

        Raises
        ------
        InvalidEmailError
            If ``raw`` is empty or not shaped like ``local@domain.tld``
        """
        return cls(cls.canonical(raw or ""))

    def matches(self, raw: str) -> bool:
        """Exact comparison against ``raw`` after canonicalizing it."""
        return self.address == self.canonical(raw)

    @property
    def domain(self) -> str:
        return self.address.rpartition("@")[2]

    def __str__(self) -> str:
        return self.address
