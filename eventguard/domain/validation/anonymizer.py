"""Salted one-way anonymization of identifying values."""

from __future__ import annotations

import hashlib
from typing import Union


def anonymize(salt: Union[str, bytes], data: str) -> str:
    """
    Replace a value with the hex SHA-256 digest of salt + value.

    Blank values carry no information and are returned unchanged.
    """
    if not data.strip():
        return data
    salt_bytes = salt.encode("utf-8") if isinstance(salt, str) else salt
    digest = hashlib.sha256()
    digest.update(salt_bytes)
    digest.update(data.encode("utf-8"))
    return digest.hexdigest()
