"""
Validation utilities for paths and serialized trees.

Provides functions to normalize caller supplied paths and to check
raw serialized data before it is parsed into models.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from nodetree.core.exceptions import InvalidSerializedFormError, PathNotFoundError
from nodetree.core.logging import get_logger
from nodetree.schemas.node import Node, Path

logger = get_logger(__name__)


def as_path(path: Iterable[str] | None) -> Path:
    """
    Normalize a caller supplied path to a tuple of ids.

    A bare string is treated as a single id rather than a sequence of
    characters.

    Args:
        path: Sequence of node ids, a single id, or None for the root

    Returns:
        Path tuple

    Raises:
        PathNotFoundError: If an element is not a non-empty string, since
            no node can carry such an id
    """
    if path is None:
        return ()
    if isinstance(path, str):
        path = (path,)
    result = tuple(path)
    for node_id in result:
        if not isinstance(node_id, str) or not node_id:
            logger.debug(f"Malformed path element {node_id!r}")
            raise PathNotFoundError(result, missing_id=repr(node_id))
    return result


def is_prefix(prefix: Sequence[str], path: Sequence[str]) -> bool:
    """Check whether ``prefix`` equals ``path`` or is an ancestor path of it."""
    return len(prefix) <= len(path) and tuple(path[: len(prefix)]) == tuple(prefix)


def check_depth(records: Any, max_depth: int, children_key: str = "children") -> None:
    """
    Reject serialized data nested deeper than ``max_depth``.

    Walks the raw JSON structure iteratively so that hostile input cannot
    exhaust the interpreter's recursion limit before validation runs.

    Args:
        records: Raw list of node records
        max_depth: Deepest nesting allowed (top level is depth 1)
        children_key: Key holding child records

    Raises:
        InvalidSerializedFormError: If any record is nested too deep
    """
    if not isinstance(records, list):
        raise InvalidSerializedFormError("expected a list of node records")

    stack: list[tuple[list[Any], int]] = [(records, 1)]
    while stack:
        items, depth = stack.pop()
        if items and depth > max_depth:
            logger.warning(f"Serialized tree exceeds max depth {max_depth}")
            raise InvalidSerializedFormError(
                f"tree is deeper than {max_depth} levels", details={"max_depth": max_depth}
            )
        for item in items:
            if isinstance(item, dict):
                children = item.get(children_key)
                if isinstance(children, list):
                    stack.append((children, depth + 1))


def find_duplicate_ids(nodes: Iterable[Node]) -> list[str]:
    """
    Find ids used more than once across the given subtrees.

    Args:
        nodes: Root nodes of the subtrees to scan

    Returns:
        Duplicate ids in first-seen order
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for root in nodes:
        for node in root.iter_subtree():
            if node.id is None:
                continue
            if node.id in seen and node.id not in duplicates:
                duplicates.append(node.id)
            seen.add(node.id)
    return duplicates
