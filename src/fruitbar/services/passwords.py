"""
fruitbar.services.passwords

Password hashing (bcrypt).
"""

from __future__ import annotations

import bcrypt


def hash_password(raw: str, *, rounds: int = 12) -> str:
    return bcrypt.hashpw(raw.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")
