"""
Base class for domain tree adapters.

An adapter fixes the payload shape and record form of one use site
(gallery, menu) and forwards edits to a shared TreeEditor.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from nodetree.core.exceptions import InvalidNodeError
from nodetree.core.logging import get_logger
from nodetree.schemas.breadcrumb import BreadcrumbTrail
from nodetree.schemas.node import Node, NodeTree, Path
from nodetree.schemas.results import EditResult
from nodetree.services.breadcrumb_navigator import BreadcrumbNavigator
from nodetree.services.tree_editor import TreeEditor
from nodetree.services.tree_serializer import TreeSerializer
from nodetree.utils import view_path as view_paths

logger = get_logger(__name__)


class TreeAdapter(ABC):
    """
    Shared plumbing for the gallery and menu adapters.

    Subclasses set ``record_type`` and implement ``encode``, ``decode``
    and ``check_node``.
    """

    record_type: type[BaseModel]
    root_label: str = ""

    def __init__(self, editor: TreeEditor | None = None) -> None:
        """
        Initialize adapter.

        Args:
            editor: Tree editor to forward edits to
        """
        self.editor = editor or TreeEditor()
        self.resolver = self.editor.resolver
        self.navigator = BreadcrumbNavigator(root_label=self.root_label)
        self.serializer = TreeSerializer(self.record_type, self.encode, self.decode)

    @abstractmethod
    def encode(self, node: Node, index: int, children: list[Any]) -> BaseModel:
        """Map a node and its encoded children to a record."""

    @abstractmethod
    def decode(self, record: Any, children: tuple[Node, ...]) -> Node:
        """Map a record and its decoded children to a node."""

    @abstractmethod
    def check_node(self, node: Node) -> None:
        """Raise InvalidNodeError if ``node`` does not fit this adapter."""

    # Edits shared by both use sites

    def remove_item(self, tree: NodeTree, path: Iterable[str]) -> EditResult:
        """Remove an item and everything below it."""
        return self.editor.remove_node(tree, path)

    def move_item(
        self,
        tree: NodeTree,
        source_path: Iterable[str],
        dest_parent_path: Iterable[str],
        dest_index: int | None = None,
    ) -> EditResult:
        """Apply a completed drag: move an item under a new parent."""
        return self.editor.move_node(tree, source_path, dest_parent_path, dest_index)

    # Navigation

    def breadcrumbs(self, tree: NodeTree, view_path: Iterable[str]) -> BreadcrumbTrail:
        return self.navigator.breadcrumbs_for(tree, view_path)

    def go_up(self, view_path: Iterable[str]) -> Path:
        return view_paths.pop(view_path)

    # Serialization

    def to_records(self, tree: NodeTree) -> list[dict[str, Any]]:
        return self.serializer.to_records(tree)

    def from_records(self, data: Any) -> NodeTree:
        return self.serializer.from_records(data)

    def dumps(self, tree: NodeTree, indent: int | None = None) -> str:
        return self.serializer.dumps(tree, indent=indent)

    def loads(self, text: str | bytes) -> NodeTree:
        return self.serializer.loads(text)

    def validate(self, tree: NodeTree) -> None:
        """
        Check every node against this adapter's rules.

        Raises:
            InvalidNodeError: On the first node that does not fit
        """
        for path, node in tree.walk():
            try:
                self.check_node(node)
            except InvalidNodeError as e:
                logger.warning(f"Invalid node at {list(path)}: {e.message}")
                e.details.setdefault("path", list(path))
                raise

    def _reject(self, tree: NodeTree, error: InvalidNodeError) -> EditResult:
        logger.warning(f"{type(self).__name__} rejected edit: {error.message}")
        return EditResult(tree=tree, error=error)
