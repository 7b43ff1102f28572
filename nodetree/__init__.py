"""
Hierarchical ordered node store for CMS galleries and menus.

Immutable trees addressed by stable id paths, edited through pure
operations that return new snapshots.
"""

from nodetree.core.exceptions import (
    CycleError,
    DuplicateIdError,
    InvalidNodeError,
    InvalidSerializedFormError,
    ParentIsLeafError,
    ParentNotFoundError,
    PathNotFoundError,
    TreeError,
)
from nodetree.schemas import (
    BreadcrumbItem,
    BreadcrumbTrail,
    EditResult,
    MediaRef,
    MediaType,
    MenuItemType,
    MenuTarget,
    Node,
    NodeKind,
    NodeTree,
    OpenTarget,
    ParentResolution,
    Path,
    Resolution,
)
from nodetree.services import (
    BreadcrumbNavigator,
    GalleryTreeAdapter,
    MenuTreeAdapter,
    PathResolver,
    TreeEditor,
    TreeSerializer,
)

__all__ = [
    "BreadcrumbItem",
    "BreadcrumbNavigator",
    "BreadcrumbTrail",
    "CycleError",
    "DuplicateIdError",
    "EditResult",
    "GalleryTreeAdapter",
    "InvalidNodeError",
    "InvalidSerializedFormError",
    "MediaRef",
    "MediaType",
    "MenuItemType",
    "MenuTarget",
    "MenuTreeAdapter",
    "Node",
    "NodeKind",
    "NodeTree",
    "OpenTarget",
    "ParentIsLeafError",
    "ParentNotFoundError",
    "ParentResolution",
    "Path",
    "PathNotFoundError",
    "PathResolver",
    "Resolution",
    "TreeEditor",
    "TreeError",
    "TreeSerializer",
]
