"""User account known to the credential gate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    id: str
    username: str
    password_hash: str
    is_admin: bool = False


@dataclass
class Session:
    """Who is logged in for the current caller; ``None`` means anonymous."""

    username: str | None = None
