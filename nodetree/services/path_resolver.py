"""
Path resolver for the node tree.

Resolves id paths to nodes. The raising ``locate*`` methods are used by
the editor; ``resolve`` and ``resolve_parent`` wrap them into result
objects for callers.
"""

from collections.abc import Iterable

from nodetree.core.exceptions import ParentIsLeafError, PathNotFoundError, TreeError
from nodetree.core.logging import get_logger
from nodetree.schemas.node import Node, NodeTree, Path
from nodetree.schemas.results import ParentResolution, Resolution
from nodetree.utils.validators import as_path

logger = get_logger(__name__)


def index_of(children: tuple[Node, ...], node_id: str) -> int | None:
    for index, child in enumerate(children):
        if child.id == node_id:
            return index
    return None


class PathResolver:
    """
    Resolves paths of stable ids against a tree snapshot.

    Stateless; a single instance can serve any number of trees.
    """

    def locate_parent(
        self, tree: NodeTree, path: Iterable[str]
    ) -> tuple[Node | NodeTree, int, Node]:
        """
        Walk the path and return the target with its parent and index.

        Args:
            tree: Tree snapshot
            path: Path to the target node

        Returns:
            Tuple of (parent, index among parent's children, node)

        Raises:
            PathNotFoundError: If the path is empty or an id is missing
            ParentIsLeafError: If the path descends through a leaf
        """
        path = as_path(path)
        if not path:
            raise PathNotFoundError(path)

        parent: Node | NodeTree = tree
        for depth, node_id in enumerate(path):
            if isinstance(parent, Node) and parent.is_leaf:
                raise ParentIsLeafError(path[:depth], parent.id)

            index = index_of(parent.children, node_id)
            if index is None:
                raise PathNotFoundError(path, missing_id=node_id)

            node = parent.children[index]
            if depth == len(path) - 1:
                return parent, index, node
            parent = node

        raise PathNotFoundError(path)  # pragma: no cover

    def locate(self, tree: NodeTree, path: Iterable[str]) -> Node:
        """Return the node at ``path`` or raise."""
        _, _, node = self.locate_parent(tree, path)
        return node

    def children_at(self, tree: NodeTree, path: Iterable[str]) -> tuple[Node, ...]:
        """
        Return the children of the container at ``path``.

        The empty path yields the top-level nodes.

        Raises:
            PathNotFoundError: If the path does not resolve
            ParentIsLeafError: If the path ends at a leaf
        """
        path = as_path(path)
        if not path:
            return tree.children
        node = self.locate(tree, path)
        if node.is_leaf:
            raise ParentIsLeafError(path, node.id)
        return node.children

    def resolve(self, tree: NodeTree, path: Iterable[str]) -> Resolution:
        """
        Resolve a path to a node.

        Args:
            tree: Tree snapshot
            path: Path of ids from the top level down to the target

        Returns:
            Resolution holding the node, or the PathNotFoundError /
            ParentIsLeafError that stopped the walk. A malformed path
            reports PathNotFoundError with an empty ``path``.
        """
        resolved: Path = ()
        try:
            resolved = as_path(path)
            return Resolution(path=resolved, node=self.locate(tree, resolved))
        except TreeError as e:
            logger.debug(f"Could not resolve {list(resolved)}: {e.message}")
            return Resolution(path=resolved, error=e)

    def resolve_parent(self, tree: NodeTree, path: Iterable[str]) -> ParentResolution:
        """
        Resolve a path to the node, its parent and its sibling index.

        Top-level nodes report the tree itself as their parent.
        """
        resolved: Path = ()
        try:
            resolved = as_path(path)
            parent, index, node = self.locate_parent(tree, resolved)
        except TreeError as e:
            logger.debug(f"Could not resolve parent of {list(resolved)}: {e.message}")
            return ParentResolution(path=resolved, error=e)
        return ParentResolution(path=resolved, parent=parent, index=index, node=node)
