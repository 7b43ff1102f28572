"""
Menu tree adapter.

Multi-level navigation menus. Every menu item carries a MenuTarget and
may hold sub-items whether or not it also links somewhere, so items are
always created as containers and the leaf rule never blocks nesting.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from nodetree.core.config import settings
from nodetree.core.exceptions import InvalidNodeError, PathNotFoundError
from nodetree.core.logging import get_logger
from nodetree.schemas.node import MenuItemType, MenuTarget, Node, NodeTree, OpenTarget
from nodetree.schemas.records import MenuItemRecord
from nodetree.schemas.results import EditResult, Resolution
from nodetree.services.base_adapter import TreeAdapter

logger = get_logger(__name__)

# Serialized link targets, as stored by the admin UI
TARGET_VALUES = {OpenTarget.SELF: "_self", OpenTarget.BLANK: "_blank"}
TARGETS_BY_VALUE = {value: target for target, value in TARGET_VALUES.items()}

TARGET_FIELDS = frozenset(MenuTarget.model_fields) - {"payload_type"}


class MenuTreeAdapter(TreeAdapter):
    """
    Adapter for navigation menus.

    Items are addressed by id paths at any depth.
    """

    record_type = MenuItemRecord
    root_label = settings.MENU_ROOT_LABEL

    def add_item(
        self,
        tree: NodeTree,
        parent_path: Iterable[str] = (),
        label: str | None = None,
        url: str | None = None,
        type: MenuItemType | str = MenuItemType.CUSTOM,  # noqa: A002
        open_target: OpenTarget | str = OpenTarget.SELF,
        icon: str | None = None,
        css_class: str | None = None,
        position: int | None = None,
    ) -> EditResult:
        """
        Add a menu item, at the top level or as a sub-item.

        Args:
            tree: Menu snapshot
            parent_path: Item to nest under (empty for the top level)
            label: Display label (defaults to MENU_DEFAULT_LABEL)
            url: Link URL (defaults to MENU_DEFAULT_URL)
            type: Linked entity type
            open_target: Same tab or new tab
            icon: Optional icon name
            css_class: Optional CSS class
            position: Sibling position (None appends)

        Returns:
            EditResult whose ``inserted`` holds the new item
        """
        try:
            target = MenuTarget(
                url=settings.MENU_DEFAULT_URL if url is None else url,
                type=type,
                open_target=open_target,
                icon=icon,
                css_class=css_class,
            )
        except ValidationError as e:
            return self._reject(
                tree,
                InvalidNodeError(
                    "Invalid menu item", details={"errors": e.errors(include_url=False)}
                ),
            )
        node = Node.container(label or settings.MENU_DEFAULT_LABEL, payload=target)
        return self.editor.insert_child(tree, parent_path, node, position=position)

    def update_item(self, tree: NodeTree, path: Iterable[str], **changes: Any) -> EditResult:
        """
        Edit a menu item's label or link fields.

        Sub-items are never touched by an edit.

        Args:
            tree: Menu snapshot
            path: Path of the item
            **changes: ``label`` and/or any MenuTarget field

        Returns:
            EditResult with the new tree
        """
        unknown = set(changes) - TARGET_FIELDS - {"label"}
        if unknown:
            return self._reject(
                tree,
                InvalidNodeError(
                    f"Unknown menu item fields: {', '.join(sorted(unknown))}",
                    details={"fields": sorted(unknown)},
                ),
            )

        resolution = self.resolver.resolve(tree, path)
        if not resolution.ok:
            return EditResult(tree=tree, error=resolution.error)
        current = resolution.node

        label = changes.pop("label", current.label)
        base = current.payload.model_dump() if current.payload else {}
        base.pop("payload_type", None)
        base.setdefault("url", settings.MENU_DEFAULT_URL)
        try:
            target = MenuTarget(**{**base, **changes})
        except ValidationError as e:
            return self._reject(
                tree,
                InvalidNodeError(
                    "Invalid menu item", details={"errors": e.errors(include_url=False)}
                ),
            )
        return self.editor.update_node(tree, path, {"label": label, "payload": target})

    def find_item(self, tree: NodeTree, item_id: str) -> Resolution:
        """
        Locate an item anywhere in the menu by its id.

        Returns:
            Resolution whose ``path`` is the item's full path
        """
        path = tree.path_of(item_id)
        if path is None:
            return Resolution(path=(item_id,), error=PathNotFoundError((item_id,), item_id))
        return self.resolver.resolve(tree, path)

    def check_node(self, node: Node) -> None:
        if not isinstance(node.payload, MenuTarget):
            raise InvalidNodeError(
                f"Menu item {node.id} must carry a link target",
                details={"node_id": node.id},
            )
        if node.is_leaf:
            raise InvalidNodeError(
                f"Menu item {node.id} must be able to hold sub-items",
                details={"node_id": node.id},
            )

    def encode(self, node: Node, index: int, children: list[MenuItemRecord]) -> MenuItemRecord:
        self.check_node(node)
        target = node.payload
        return MenuItemRecord(
            id=node.id,
            label=node.label,
            url=target.url,
            type=target.type,
            target=TARGET_VALUES[target.open_target],
            icon=target.icon,
            css_class=target.css_class,
            order=index,
            children=children,
        )

    def decode(self, record: MenuItemRecord, children: tuple[Node, ...]) -> Node:
        target = MenuTarget(
            url=record.url,
            type=record.type,
            open_target=TARGETS_BY_VALUE[record.target],
            icon=record.icon,
            css_class=record.css_class,
        )
        return Node.container(record.label, payload=target, children=children, id=record.id)
