"""
Node tree schemas.

Defines the immutable value types of the hierarchical node store:
nodes, their payloads, and the root container. Every model is frozen;
edits produce new snapshots through the tree editor.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Path = tuple[str, ...]


class NodeKind(StrEnum):
    """Whether a node may hold children."""

    CONTAINER = "container"
    LEAF = "leaf"


class MediaType(StrEnum):
    """Kind of media a gallery leaf points at."""

    IMAGE = "image"
    VIDEO = "video"


class MenuItemType(StrEnum):
    """What a menu item links to."""

    PAGE = "page"
    POST = "post"
    CATEGORY = "category"
    PRODUCT = "product"
    CUSTOM = "custom"


class OpenTarget(StrEnum):
    """Where a menu link opens."""

    SELF = "self"
    BLANK = "blank"


class MediaRef(BaseModel):
    """Payload of a gallery leaf: a reference to an uploaded file."""

    model_config = ConfigDict(frozen=True)

    payload_type: Literal["media"] = "media"
    url: str = Field(..., min_length=1, description="Public URL of the media file")
    media_type: MediaType = Field(default=MediaType.IMAGE, description="Image or video")
    alt: str | None = Field(None, description="Alternative text")


class MenuTarget(BaseModel):
    """Payload of a menu item: where the item navigates to."""

    model_config = ConfigDict(frozen=True)

    payload_type: Literal["menu"] = "menu"
    url: str = Field(..., description="Link URL")
    type: MenuItemType = Field(default=MenuItemType.CUSTOM, description="Linked entity type")
    open_target: OpenTarget = Field(default=OpenTarget.SELF, description="Same tab or new tab")
    icon: str | None = Field(None, description="Optional icon name")
    css_class: str | None = Field(None, description="Optional CSS class")


Payload = Annotated[MediaRef | MenuTarget, Field(discriminator="payload_type")]


def _walk(children: tuple[Node, ...], prefix: Path) -> Iterator[tuple[Path, Node]]:
    for child in children:
        path = (*prefix, child.id)
        yield path, child
        yield from _walk(child.children, path)


class Node(BaseModel):
    """
    A single node of the tree.

    A node created by the caller for insertion may leave ``id`` unset;
    the editor stamps a generated id on it. Nodes stored in a tree
    always carry an id.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(None, min_length=1, description="Stable unique identifier")
    kind: NodeKind = Field(default=NodeKind.CONTAINER, description="Container or leaf")
    label: str = Field(default="", description="Display label")
    payload: Payload | None = Field(None, description="Adapter specific data")
    children: tuple[Node, ...] = Field(default=(), description="Ordered child nodes")

    @model_validator(mode="after")
    def check_leaf_has_no_children(self) -> Node:
        """Leaves cannot hold children."""
        if self.kind is NodeKind.LEAF and self.children:
            raise ValueError(f"Leaf node {self.id!r} cannot have children")
        return self

    @classmethod
    def container(
        cls,
        label: str,
        payload: MediaRef | MenuTarget | None = None,
        children: tuple[Node, ...] = (),
        id: str | None = None,  # noqa: A002
    ) -> Node:
        """Build a container node."""
        return cls(
            id=id, kind=NodeKind.CONTAINER, label=label, payload=payload, children=children
        )

    @classmethod
    def leaf(
        cls,
        label: str,
        payload: MediaRef | MenuTarget | None = None,
        id: str | None = None,  # noqa: A002
    ) -> Node:
        """Build a leaf node."""
        return cls(id=id, kind=NodeKind.LEAF, label=label, payload=payload)

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_container(self) -> bool:
        return self.kind is NodeKind.CONTAINER

    def iter_subtree(self) -> Iterator[Node]:
        """Yield this node and all its descendants, pre-order."""
        yield self
        for _, node in _walk(self.children, ()):
            yield node


class NodeTree(BaseModel):
    """
    Immutable root container of a tree.

    The root has no id and is not addressable; the empty path refers to it.
    """

    model_config = ConfigDict(frozen=True)

    children: tuple[Node, ...] = Field(default=(), description="Top-level nodes")

    @model_validator(mode="after")
    def check_ids(self) -> NodeTree:
        """Every node in a tree has an id, and ids are unique."""
        seen: set[str] = set()
        for _, node in _walk(self.children, ()):
            if node.id is None:
                raise ValueError("Every node in a tree must have an id")
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    @classmethod
    def empty(cls) -> NodeTree:
        """Build a tree with no nodes."""
        return cls()

    def walk(self) -> Iterator[tuple[Path, Node]]:
        """Yield ``(path, node)`` for every node, depth-first pre-order."""
        return _walk(self.children, ())

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node, depth-first pre-order."""
        for _, node in self.walk():
            yield node

    def node_ids(self) -> set[str]:
        return {node.id for node in self.iter_nodes()}

    def path_of(self, node_id: str) -> Path | None:
        """
        Find the path of a node by id.

        Args:
            node_id: Id to look for

        Returns:
            Path to the node, or None if no node has that id
        """
        for path, node in self.walk():
            if node.id == node_id:
                return path
        return None

    @property
    def size(self) -> int:
        """Total number of nodes."""
        return sum(1 for _ in self.walk())

    @property
    def depth(self) -> int:
        """Length of the longest path; 0 for an empty tree."""
        return max((len(path) for path, _ in self.walk()), default=0)
