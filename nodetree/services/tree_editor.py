"""
Tree editor service.

Implements the mutation surface of the node store as pure functions
over immutable snapshots. Every edit copies only the nodes on the path
from the root to the edited container ("path copying"); untouched
sibling subtrees are shared by reference between snapshots, so keeping
the previous snapshot around for "cancel" costs nothing.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from nodetree.core.exceptions import (
    CycleError,
    DuplicateIdError,
    InvalidNodeError,
    ParentNotFoundError,
    PathNotFoundError,
    TreeError,
)
from nodetree.core.logging import get_logger
from nodetree.schemas.node import Node, NodeTree, Path
from nodetree.schemas.results import EditResult
from nodetree.services.path_resolver import PathResolver, index_of
from nodetree.utils.ids import generate_node_id
from nodetree.utils.validators import as_path, find_duplicate_ids, is_prefix

logger = get_logger(__name__)

Children = tuple[Node, ...]
Updater = Callable[[Node], Node] | Mapping[str, Any]


def _clamp(position: int | None, length: int) -> int:
    """Resolve an insert position the way ``list.insert`` does."""
    if position is None:
        return length
    if position < 0:
        return max(0, length + position)
    return min(position, length)


class TreeEditor:
    """
    Service for tree edit operations.

    Every public operation returns an EditResult. On failure the result
    carries the typed error and the input tree reference, unchanged.
    """

    def __init__(
        self,
        resolver: PathResolver | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """
        Initialize tree editor.

        Args:
            resolver: Path resolver to use (a fresh one by default)
            id_factory: Callable producing new node ids
        """
        self.resolver = resolver or PathResolver()
        self.id_factory = id_factory or generate_node_id

    # Public operations

    def insert_child(
        self,
        tree: NodeTree,
        parent_path: Iterable[str],
        new_node: Node,
        position: int | None = None,
    ) -> EditResult:
        """
        Insert a node under the container at ``parent_path``.

        Args:
            tree: Tree snapshot
            parent_path: Path of the parent container (empty for the root)
            new_node: Node to insert; missing ids are generated
            position: Sibling position (None appends)

        Returns:
            EditResult with the new tree and the inserted node
        """
        return self._attempt(
            "insert_child",
            tree,
            lambda: self._insert(tree, as_path(parent_path), (new_node,), position),
        )

    def insert_children(
        self,
        tree: NodeTree,
        parent_path: Iterable[str],
        new_nodes: Sequence[Node],
    ) -> EditResult:
        """
        Append a batch of nodes as siblings, all or none.

        Used when several uploads complete together.

        Args:
            tree: Tree snapshot
            parent_path: Path of the parent container (empty for the root)
            new_nodes: Nodes to append, in order

        Returns:
            EditResult with the new tree and the inserted nodes in order
        """
        return self._attempt(
            "insert_children",
            tree,
            lambda: self._insert(tree, as_path(parent_path), tuple(new_nodes), None),
        )

    def update_node(
        self,
        tree: NodeTree,
        path: Iterable[str],
        updater: Updater,
    ) -> EditResult:
        """
        Change the label and/or payload of the node at ``path``.

        ``updater`` is either a callable receiving the current node and
        returning a modified copy, or a mapping of field changes. Only
        ``label`` and ``payload`` are taken from its result; id, kind and
        children always keep their pre-update values, so an unrelated
        field edit can never truncate a subtree.

        Args:
            tree: Tree snapshot
            path: Path of the node to update
            updater: Callable or mapping of changes

        Returns:
            EditResult with the new tree
        """
        return self._attempt(
            "update_node", tree, lambda: self._update(tree, as_path(path), updater)
        )

    def remove_node(self, tree: NodeTree, path: Iterable[str]) -> EditResult:
        """
        Remove the node at ``path`` together with its whole subtree.

        Returns:
            EditResult with the new tree and the removed subtree
        """
        return self._attempt("remove_node", tree, lambda: self._remove(tree, as_path(path)))

    def move_node(
        self,
        tree: NodeTree,
        source_path: Iterable[str],
        dest_parent_path: Iterable[str],
        dest_index: int | None = None,
    ) -> EditResult:
        """
        Move a subtree under another container.

        ``dest_index`` counts positions among the destination's children
        after the source has been detached, which is what a completed
        drag gesture reports.

        Args:
            tree: Tree snapshot
            source_path: Path of the node to move
            dest_parent_path: Path of the new parent container
            dest_index: Position under the new parent (None appends)

        Returns:
            EditResult with the new tree
        """
        return self._attempt(
            "move_node",
            tree,
            lambda: self._move(tree, as_path(source_path), as_path(dest_parent_path), dest_index),
        )

    # Implementation

    def _attempt(
        self, operation: str, tree: NodeTree, run: Callable[[], EditResult]
    ) -> EditResult:
        try:
            result = run()
        except TreeError as e:
            logger.warning(f"{operation} failed: {e.message}")
            return EditResult(tree=tree, error=e)
        logger.debug(f"{operation} produced tree of {result.tree.size} nodes")
        return result

    def _insert(
        self,
        tree: NodeTree,
        parent_path: Path,
        new_nodes: Children,
        position: int | None,
    ) -> EditResult:
        try:
            self.resolver.children_at(tree, parent_path)
        except PathNotFoundError as e:
            raise ParentNotFoundError(parent_path, missing_id=e.missing_id) from e

        for node in new_nodes:
            if not isinstance(node, Node):
                raise InvalidNodeError(
                    f"Expected a Node, got {type(node).__name__}",
                    details={"type": type(node).__name__},
                )

        stamped = tuple(self._stamp_ids(node) for node in new_nodes)
        self._check_unique(tree, stamped)

        def insert(children: Children) -> Children:
            index = _clamp(position, len(children))
            return (*children[:index], *stamped, *children[index:])

        new_tree = self._rewrite(tree, parent_path, insert)
        logger.info(f"Inserted {len(stamped)} node(s) under {list(parent_path)}")
        return EditResult(tree=new_tree, inserted=stamped)

    def _update(self, tree: NodeTree, path: Path, updater: Updater) -> EditResult:
        current = self.resolver.locate(tree, path)

        if isinstance(updater, Mapping):
            candidate = current.model_copy(update=dict(updater))
        else:
            candidate = updater(current)
        if not isinstance(candidate, Node):
            raise InvalidNodeError(
                "Updater must return a Node",
                details={"type": type(candidate).__name__},
            )

        try:
            updated = Node(
                id=current.id,
                kind=current.kind,
                label=candidate.label,
                payload=candidate.payload,
            )
        except ValidationError as e:
            raise InvalidNodeError(
                f"Invalid update for node {current.id}", details={"errors": e.errors()}
            ) from e
        # Re-attach the original children so the subtree is shared untouched
        updated = updated.model_copy(update={"children": current.children})

        def replace(children: Children) -> Children:
            index = index_of(children, current.id)
            return (*children[:index], updated, *children[index + 1 :])

        new_tree = self._rewrite(tree, path[:-1], replace)
        logger.debug(f"Updated node {current.id}")
        return EditResult(tree=new_tree)

    def _remove(self, tree: NodeTree, path: Path) -> EditResult:
        _, index, removed = self.resolver.locate_parent(tree, path)

        def drop(children: Children) -> Children:
            return (*children[:index], *children[index + 1 :])

        new_tree = self._rewrite(tree, path[:-1], drop)
        logger.info(f"Removed node {removed.id} ({sum(1 for _ in removed.iter_subtree())} total)")
        return EditResult(tree=new_tree, removed=removed)

    def _move(
        self,
        tree: NodeTree,
        source_path: Path,
        dest_parent_path: Path,
        dest_index: int | None,
    ) -> EditResult:
        _, source_index, moving = self.resolver.locate_parent(tree, source_path)
        if is_prefix(source_path, dest_parent_path):
            raise CycleError(source_path, dest_parent_path)
        self.resolver.children_at(tree, dest_parent_path)

        def detach(children: Children) -> Children:
            return (*children[:source_index], *children[source_index + 1 :])

        def attach(children: Children) -> Children:
            index = _clamp(dest_index, len(children))
            return (*children[:index], moving, *children[index:])

        # The destination cannot pass through the source, so its path
        # still resolves after the detach.
        detached = self._rewrite(tree, source_path[:-1], detach)
        new_tree = self._rewrite(detached, dest_parent_path, attach)
        logger.info(f"Moved node {moving.id} under {list(dest_parent_path)}")
        return EditResult(tree=new_tree)

    def _stamp_ids(self, node: Node) -> Node:
        """Give ``node`` and every id-less descendant a fresh id."""
        children = tuple(self._stamp_ids(child) for child in node.children)
        updates: dict[str, Any] = {}
        if node.id is None:
            updates["id"] = self.id_factory()
        if any(new is not old for new, old in zip(children, node.children, strict=True)):
            updates["children"] = children
        return node.model_copy(update=updates) if updates else node

    def _check_unique(self, tree: NodeTree, new_nodes: Children) -> None:
        duplicates = find_duplicate_ids(new_nodes)
        if duplicates:
            raise DuplicateIdError(duplicates[0])

        existing = tree.node_ids()
        for root in new_nodes:
            for node in root.iter_subtree():
                if node.id in existing:
                    raise DuplicateIdError(node.id)

    def _rewrite(
        self, tree: NodeTree, parent_path: Path, edit: Callable[[Children], Children]
    ) -> NodeTree:
        """
        Copy the path from the root to ``parent_path`` and apply ``edit``
        to that container's children.

        The path must already have been validated.
        """
        return tree.model_copy(
            update={"children": self._rewrite_children(tree.children, parent_path, edit)}
        )

    def _rewrite_children(
        self, children: Children, path: Path, edit: Callable[[Children], Children]
    ) -> Children:
        if not path:
            return edit(children)
        index = index_of(children, path[0])
        node = children[index]
        copied = node.model_copy(
            update={"children": self._rewrite_children(node.children, path[1:], edit)}
        )
        return (*children[:index], copied, *children[index + 1 :])
