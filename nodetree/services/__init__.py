"""Services package for tree resolution, editing, navigation and adapters."""

from nodetree.services.breadcrumb_navigator import BreadcrumbNavigator
from nodetree.services.gallery_adapter import GalleryTreeAdapter
from nodetree.services.menu_adapter import MenuTreeAdapter
from nodetree.services.path_resolver import PathResolver
from nodetree.services.tree_editor import TreeEditor
from nodetree.services.tree_serializer import TreeSerializer

__all__ = [
    "BreadcrumbNavigator",
    "GalleryTreeAdapter",
    "MenuTreeAdapter",
    "PathResolver",
    "TreeEditor",
    "TreeSerializer",
]
