"""
Operation result schemas.

Resolver and editor operations never raise across their public
boundary; they return one of these result objects carrying either the
value or the typed error that stopped the operation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from nodetree.core.exceptions import TreeError
from nodetree.schemas.node import Node, NodeTree, Path


class OperationResult(BaseModel):
    """Base result: success unless ``error`` is set."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: TreeError | None = Field(None, description="Error that stopped the operation")

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any."""
        if self.error is not None:
            raise self.error


class Resolution(OperationResult):
    """Result of resolving a path to a node."""

    path: Path = Field(..., description="Path that was resolved")
    node: Node | None = Field(None, description="Resolved node on success")

    def unwrap(self) -> Node:
        """Return the resolved node or raise the error."""
        self.raise_for_error()
        return self.node


class ParentResolution(OperationResult):
    """Result of locating a node together with its parent and sibling index."""

    path: Path = Field(..., description="Path that was resolved")
    parent: Node | NodeTree | None = Field(
        None, description="Parent node, or the tree itself for top-level nodes"
    )
    index: int | None = Field(None, description="Position among the parent's children")
    node: Node | None = Field(None, description="Resolved node on success")


class EditResult(OperationResult):
    """
    Result of a tree edit.

    ``tree`` is the new snapshot on success and the untouched input
    snapshot on failure.
    """

    tree: NodeTree = Field(..., description="Resulting snapshot")
    inserted: tuple[Node, ...] = Field(
        default=(), description="Inserted nodes with their generated ids"
    )
    removed: Node | None = Field(None, description="Removed subtree, kept for undo")

    def unwrap(self) -> NodeTree:
        """Return the new snapshot or raise the error."""
        self.raise_for_error()
        return self.tree
