"""
View path helpers.

The current view path is UI/session state owned by the caller. These
pure functions implement its transitions; none of them touch a tree.
"""

from collections.abc import Iterable

from nodetree.schemas.node import Path
from nodetree.utils.validators import as_path


def push(path: Iterable[str], node_id: str) -> Path:
    """Enter a child: append ``node_id`` to the view path."""
    return (*as_path(path), *as_path(node_id))


def pop(path: Iterable[str]) -> Path:
    """Go up one level. Popping the root stays at the root."""
    return as_path(path)[:-1]


def reset() -> Path:
    """Return to the root."""
    return ()


def set_to(path: Iterable[str]) -> Path:
    """Jump to a path, e.g. after a breadcrumb click."""
    return as_path(path)
