"""Schemas package for tree values, results and serialized records."""

from nodetree.schemas.breadcrumb import BreadcrumbItem, BreadcrumbTrail
from nodetree.schemas.node import (
    MediaRef,
    MediaType,
    MenuItemType,
    MenuTarget,
    Node,
    NodeKind,
    NodeTree,
    OpenTarget,
    Path,
)
from nodetree.schemas.records import GalleryItemRecord, MenuItemRecord, NodeRecord
from nodetree.schemas.results import EditResult, ParentResolution, Resolution

__all__ = [
    "BreadcrumbItem",
    "BreadcrumbTrail",
    "EditResult",
    "GalleryItemRecord",
    "MediaRef",
    "MediaType",
    "MenuItemRecord",
    "MenuItemType",
    "MenuTarget",
    "Node",
    "NodeKind",
    "NodeRecord",
    "NodeTree",
    "OpenTarget",
    "ParentResolution",
    "Path",
    "Resolution",
]
