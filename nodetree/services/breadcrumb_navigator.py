"""
Breadcrumb navigator.

Derives the display trail for a view path. Recomputed on every render;
trees are small enough that no caching is needed.
"""

from collections.abc import Iterable

from nodetree.core.exceptions import PathNotFoundError
from nodetree.core.logging import get_logger
from nodetree.schemas.breadcrumb import BreadcrumbItem, BreadcrumbTrail
from nodetree.schemas.node import Node, NodeTree, Path
from nodetree.services.path_resolver import index_of
from nodetree.utils.validators import as_path

logger = get_logger(__name__)


class BreadcrumbNavigator:
    """Builds breadcrumb trails from a tree and a view path."""

    def __init__(self, root_label: str = "") -> None:
        """
        Initialize navigator.

        Args:
            root_label: Label rendered for the root crumb
        """
        self.root_label = root_label

    def breadcrumbs_for(self, tree: NodeTree, path: Iterable[str]) -> BreadcrumbTrail:
        """
        Generate breadcrumb trail for a view path.

        Each prefix of the path is resolved in turn. A prefix that no
        longer resolves (for instance after its node was removed) yields
        an empty trail flagged ``reset_to_root`` instead of an error.

        Args:
            tree: Tree snapshot
            path: Current view path

        Returns:
            Breadcrumb trail from root to tip
        """
        try:
            path = as_path(path)
        except PathNotFoundError as e:
            logger.info(f"Malformed view path; resetting to root: {e.message}")
            return BreadcrumbTrail(root_label=self.root_label, reset_to_root=True)

        items: list[BreadcrumbItem] = []
        siblings: tuple[Node, ...] = tree.children

        for depth, node_id in enumerate(path):
            index = index_of(siblings, node_id)
            if index is None:
                logger.info(f"Stale view path {list(path)}; resetting to root")
                return BreadcrumbTrail(root_label=self.root_label, reset_to_root=True)

            node = siblings[index]
            items.append(BreadcrumbItem(id=node.id, label=node.label, path=path[: depth + 1]))
            siblings = node.children

        return BreadcrumbTrail(items=tuple(items), root_label=self.root_label)

    def recover(self, tree: NodeTree, view_path: Iterable[str]) -> tuple[BreadcrumbTrail, Path]:
        """
        Build the trail and apply the stale-path recovery rule.

        Returns:
            Tuple of (trail, view path the caller should keep)
        """
        trail = self.breadcrumbs_for(tree, view_path)
        if trail.reset_to_root or trail.current is None:
            return trail, ()
        return trail, trail.current.path
