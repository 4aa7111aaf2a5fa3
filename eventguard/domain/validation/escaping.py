"""
Escaping of validated events before they are written to the event log.

Only printable ASCII survives: non-ASCII characters become ``?``, quotes
are dropped and control characters are replaced. Separators used by the
log format are replaced with ``_`` in group ids, session ids and field
names.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .verdicts import is_sentinel

SYMBOLS_TO_REPLACE = ":;, "
SYMBOLS_TO_REPLACE_FIELD_NAME = "." + SYMBOLS_TO_REPLACE

_WHITESPACE_TO_REPLACE = frozenset("\n\r\t")
_PROHIBITED = frozenset("'\"")


def escape_event_id_or_field_value(value: str) -> str:
    """Only printable ASCII except whitespace and quotes is allowed."""
    return _escape(value, None, allow_spaces=True)


def escape(value: str) -> str:
    """Only printable ASCII except whitespace, quotes and ``:;,`` is allowed."""
    return _escape(value, SYMBOLS_TO_REPLACE, allow_spaces=False)


def escape_field_name(name: str) -> str:
    """Like :func:`escape` but also replaces dots; sentinels are kept."""
    if is_sentinel(name):
        return name
    return _escape(name, SYMBOLS_TO_REPLACE_FIELD_NAME, allow_spaces=False)


def escape_event_data(event_data: Mapping[str, Any]) -> dict[str, Any]:
    return {escape_field_name(key): escape_event_data_value(value) for key, value in event_data.items()}


def escape_ids(ids: Mapping[str, str]) -> dict[str, str]:
    return {escape_field_name(key): escape_event_id_or_field_value(value) for key, value in ids.items()}


def escape_event_data_value(value: Any) -> Any:
    if isinstance(value, str):
        return escape_event_id_or_field_value(value)
    if isinstance(value, (list, tuple)):
        return [escape_event_data_value(item) if item is not None else None for item in value]
    if isinstance(value, Mapping):
        escaped = {}
        for key, item in value.items():
            new_key = escape_field_name(key) if isinstance(key, str) else key
            escaped[new_key] = escape_event_data_value(item) if item is not None else None
        return escaped
    return value


def cleanup_for_legacy_rules(value: str) -> Optional[str]:
    """
    Remove separators that older rule sets did not allow.

    Returns:
        Cleaned value, or None when there is nothing to clean
    """
    if _contains_system_symbols(value, SYMBOLS_TO_REPLACE):
        return _replace(value, SYMBOLS_TO_REPLACE, allow_spaces=False)
    return None


def _escape(value: str, to_replace: Optional[str], allow_spaces: bool) -> str:
    if _contains_system_symbols(value, to_replace):
        return _replace(value, to_replace, allow_spaces)
    return value


def _replace(value: str, to_replace: Optional[str], allow_spaces: bool) -> str:
    out = []
    for char in value:
        if not _is_ascii(char):
            out.append("?")
        elif char in _WHITESPACE_TO_REPLACE:
            out.append(" " if allow_spaces else "_")
        elif _is_symbol_to_replace(char, to_replace):
            out.append("_")
        elif char not in _PROHIBITED:
            out.append(char)
    return "".join(out)


def _contains_system_symbols(value: str, to_replace: Optional[str]) -> bool:
    for char in value:
        if (
            not _is_ascii(char)
            or char in _WHITESPACE_TO_REPLACE
            or _is_symbol_to_replace(char, to_replace)
            or char in _PROHIBITED
        ):
            return True
    return False


def _is_ascii(char: str) -> bool:
    return ord(char) <= 127


def _is_symbol_to_replace(char: str, to_replace: Optional[str]) -> bool:
    if to_replace is not None and char in to_replace:
        return True
    return ord(char) < 32 or ord(char) == 127
