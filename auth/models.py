"""
auth/models.py -- Identity value objects.

Pattern: Value Object. Frozen dataclasses compare by value and cannot be
mutated after construction, so a Username that exists is always valid.

Layer rule: no imports from api/, tasks/, or timetables/.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import InvalidUsername


@dataclass(frozen=True)
class Username:
    """The non-empty key that scopes ownership of tasks and timetables.

    Construction with an empty string raises InvalidUsername. Whitespace is
    kept as given; the identity issuer decides what a username may contain.
    """

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidUsername()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Token:
    """Opaque session identifier. No format rules: the issuer owns those."""

    value: str

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        # Keep raw session tokens out of logs and tracebacks.
        return "Token(***)"


@dataclass(frozen=True)
class Credential:
    """Binds one session Token to the Username that logged in with it.

    A username may hold many credentials (one per device). The store
    guarantees a token resolves to at most one username.
    """

    username: Username
    token: Token
