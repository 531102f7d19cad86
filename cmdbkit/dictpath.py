"""Get, set and delete values in nested dicts by dotted path."""

from __future__ import annotations

from typing import Any


def shift(path: str) -> tuple[str, str]:
    """Split ``path`` into its first segment and the rest."""
    head, _, remain = path.partition(".")
    return head, remain


def set_path(data: dict[str, Any], path: str, value: Any) -> None:
    """Set ``value`` at ``path``, creating intermediate dicts as needed."""
    head, remain = shift(path)
    if head not in data:
        data[head] = {}
    if not remain:
        data[head] = value
        return
    child = data[head]
    if not isinstance(child, dict):
        raise TypeError(f"value at {head!r} is not a mapping")
    set_path(child, remain, value)


def get_path(data: dict[str, Any], path: str) -> Any:
    """Return the value at ``path``, or None if it is absent."""
    head, remain = shift(path)
    if head not in data:
        return None
    if not remain:
        return data[head]
    child = data[head]
    if isinstance(child, dict):
        return get_path(child, remain)
    return None


def delete_path(data: dict[str, Any], path: str) -> None:
    """Remove the value at ``path`` if it is present."""
    head, remain = shift(path)
    if head not in data:
        return
    if not remain:
        del data[head]
        return
    child = data[head]
    if isinstance(child, dict):
        delete_path(child, remain)