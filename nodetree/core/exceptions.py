"""
Custom exception classes for the node tree library.

Defines one exception per tree error kind, each with a stable machine
readable code, a human-readable message and optional details so callers
can map errors to user-visible feedback (e.g. "cannot drop a folder
into itself").
"""

from collections.abc import Sequence
from typing import Any


def _format_path(path: Sequence[str]) -> str:
    return "/" + "/".join(str(node_id) for node_id in path)


class TreeError(Exception):
    """Base exception class for all tree errors."""

    code = "tree_error"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize tree exception.

        Args:
            message: Human-readable error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for UI or API consumers."""
        return {"error": self.code, "message": self.message, "details": self.details}


class PathNotFoundError(TreeError):
    """Raised when a path, or a prefix of it, does not resolve."""

    code = "path_not_found"

    def __init__(self, path: Sequence[str], missing_id: str | None = None) -> None:
        message = f"Path not found: {_format_path(path)}"
        if missing_id:
            message += f" (no node {missing_id})"
        super().__init__(
            message=message,
            details={"path": list(path), "missing_id": missing_id},
        )
        self.path = tuple(path)
        self.missing_id = missing_id


class ParentNotFoundError(PathNotFoundError):
    """Raised when the parent path of an insert does not resolve."""

    code = "parent_not_found"


class ParentIsLeafError(TreeError):
    """Raised when a path descends into, or inserts under, a leaf node."""

    code = "parent_is_leaf"

    def __init__(self, path: Sequence[str], leaf_id: str) -> None:
        super().__init__(
            message=f"Node {leaf_id} is a leaf and cannot hold children",
            details={"path": list(path), "leaf_id": leaf_id},
        )
        self.path = tuple(path)
        self.leaf_id = leaf_id


class CycleError(TreeError):
    """Raised when a move would nest a node under itself or its own descendant."""

    code = "cycle"

    def __init__(self, source_path: Sequence[str], dest_parent_path: Sequence[str]) -> None:
        super().__init__(
            message=(
                f"Cannot move {_format_path(source_path)} into "
                f"{_format_path(dest_parent_path)}: a node cannot contain itself"
            ),
            details={
                "source_path": list(source_path),
                "dest_parent_path": list(dest_parent_path),
            },
        )
        self.source_path = tuple(source_path)
        self.dest_parent_path = tuple(dest_parent_path)


class DuplicateIdError(TreeError):
    """Raised when an inserted node id collides with an existing one."""

    code = "duplicate_id"

    def __init__(self, node_id: str) -> None:
        super().__init__(
            message=f"Duplicate node id: {node_id}",
            details={"node_id": node_id},
        )
        self.node_id = node_id


class InvalidSerializedFormError(TreeError):
    """Raised when serialized tree data is malformed or inconsistent."""

    code = "invalid_serialized_form"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Invalid serialized tree: {message}", details=details
        )


class InvalidNodeError(TreeError):
    """Raised when a node or payload does not fit the tree or adapter rules."""

    code = "invalid_node"
