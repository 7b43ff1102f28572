"""
Gallery tree adapter.

Nested media galleries attached to posts and pages: folders are
containers without payload, images and videos are leaves carrying a
MediaRef.
"""

from collections.abc import Iterable, Iterator, Sequence
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from nodetree.core.config import settings
from nodetree.core.exceptions import (
    InvalidNodeError,
    ParentIsLeafError,
    PathNotFoundError,
    TreeError,
)
from nodetree.core.logging import get_logger
from nodetree.schemas.node import MediaRef, MediaType, Node, NodeTree
from nodetree.schemas.records import GalleryItemRecord
from nodetree.schemas.results import EditResult, Resolution
from nodetree.services.base_adapter import TreeAdapter
from nodetree.utils import view_path as view_paths
from nodetree.utils.validators import as_path

logger = get_logger(__name__)

FOLDER_TYPE = "folder"


def label_from_url(url: str) -> str:
    """
    Derive a display label from a media URL.

    Args:
        url: Public URL of the file

    Returns:
        The decoded file name, or the URL itself if it has none
    """
    name = urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1]
    return unquote(name) or url


def _first_media_url(children: tuple[Node, ...]) -> str | None:
    for child in children:
        if isinstance(child.payload, MediaRef):
            return child.payload.url
    for child in children:
        if child.is_container:
            url = _first_media_url(child.children)
            if url is not None:
                return url
    return None


class GalleryTreeAdapter(TreeAdapter):
    """
    Adapter for media-gallery folder trees.

    Enforces ``leaf.payload = MediaRef`` and ``container.payload = None``.
    View path handling (enter/up) is pure; the caller keeps the path.
    """

    record_type = GalleryItemRecord
    root_label = settings.GALLERY_ROOT_LABEL

    def add_folder(self, tree: NodeTree, parent_path: Iterable[str], label: str) -> EditResult:
        """
        Create an empty folder at the end of ``parent_path``.

        Args:
            tree: Gallery snapshot
            parent_path: Folder to create in (empty for the root)
            label: Folder name

        Returns:
            EditResult whose ``inserted`` holds the new folder
        """
        label = (label or "").strip()
        if not label:
            return self._reject(tree, InvalidNodeError("Folder name cannot be empty"))
        return self.editor.insert_child(tree, parent_path, Node.container(label))

    def add_images(
        self,
        tree: NodeTree,
        parent_path: Iterable[str],
        urls: Sequence[str],
        media_type: MediaType = MediaType.IMAGE,
    ) -> EditResult:
        """
        Append uploaded files to a folder in one atomic step.

        Args:
            tree: Gallery snapshot
            parent_path: Folder the uploads belong to
            urls: Final URLs reported by the upload subsystem, in order
            media_type: Image or video

        Returns:
            EditResult whose ``inserted`` holds the new leaves in order
        """
        try:
            nodes = [
                Node.leaf(label_from_url(url), MediaRef(url=url, media_type=media_type))
                for url in urls
            ]
        except ValidationError as e:
            return self._reject(
                tree,
                InvalidNodeError(
                    "Invalid media URL", details={"errors": e.errors(include_url=False)}
                ),
            )
        return self.editor.insert_children(tree, parent_path, nodes)

    def rename_item(self, tree: NodeTree, path: Iterable[str], label: str) -> EditResult:
        """Rename a folder or change an image caption."""
        label = (label or "").strip()
        if not label:
            return self._reject(tree, InvalidNodeError("Label cannot be empty"))
        return self.editor.update_node(tree, path, {"label": label})

    def enter_folder(
        self, tree: NodeTree, view_path: Iterable[str], folder_id: str
    ) -> Resolution:
        """
        Descend into a folder shown at the current view path.

        Returns:
            Resolution whose ``path`` is the new view path and ``node``
            the folder; on error the caller keeps its current path
        """
        try:
            target = view_paths.push(view_path, folder_id)
        except PathNotFoundError as e:
            return Resolution(path=(), error=e)
        resolution = self.resolver.resolve(tree, target)
        if resolution.ok and resolution.node.is_leaf:
            return Resolution(path=target, error=ParentIsLeafError(target, folder_id))
        return resolution

    def list_items(self, tree: NodeTree, view_path: Iterable[str]) -> tuple[Node, ...]:
        """
        Items shown at the view path.

        A stale path falls back to the root, matching breadcrumb recovery.
        """
        try:
            return self.resolver.children_at(tree, as_path(view_path))
        except TreeError as e:
            logger.info(f"Listing root instead of the requested folder: {e.message}")
            return tree.children

    def image_urls(self, tree: NodeTree, path: Iterable[str] = ()) -> list[str]:
        """
        Media URLs in display order, folders flattened.

        Args:
            tree: Gallery snapshot
            path: Folder whose media to collect, e.g. for a lightbox opened
                on it (empty for the whole gallery)

        Returns:
            URLs of every media item under ``path``; empty if the path
            does not resolve
        """
        nodes = self._subtree(tree, path)
        return [node.payload.url for node in nodes if isinstance(node.payload, MediaRef)]

    def folder_thumbnail(self, tree: NodeTree, path: Iterable[str]) -> str | None:
        """
        Cover image for a folder tile.

        The folder's own first media item wins; otherwise its subfolders
        are searched in order, depth first.

        Returns:
            URL of the cover image, or None if the folder holds no media
            or the path does not resolve
        """
        try:
            path = as_path(path)
            if not path:
                return _first_media_url(tree.children)
            node = self.resolver.locate(tree, path)
        except TreeError as e:
            logger.info(f"No thumbnail: {e.message}")
            return None
        if isinstance(node.payload, MediaRef):
            return node.payload.url
        return _first_media_url(node.children)

    def _subtree(self, tree: NodeTree, path: Iterable[str]) -> Iterator[Node]:
        try:
            path = as_path(path)
            if not path:
                return tree.iter_nodes()
            return self.resolver.locate(tree, path).iter_subtree()
        except TreeError as e:
            logger.info(f"No media to collect: {e.message}")
            return iter(())

    def from_legacy_images(self, urls: Sequence[str]) -> NodeTree:
        """
        Build a gallery tree from the flat ``gallery_images`` list of a post.

        Raises:
            InvalidNodeError: If a URL is empty
        """
        return self.add_images(NodeTree.empty(), (), urls).unwrap()

    def check_node(self, node: Node) -> None:
        if node.is_leaf and not isinstance(node.payload, MediaRef):
            raise InvalidNodeError(
                f"Gallery item {node.id} must reference a media file",
                details={"node_id": node.id},
            )
        if node.is_container and node.payload is not None:
            raise InvalidNodeError(
                f"Gallery folder {node.id} cannot carry a payload",
                details={"node_id": node.id},
            )

    def encode(
        self, node: Node, index: int, children: list[GalleryItemRecord]
    ) -> GalleryItemRecord:
        self.check_node(node)
        if node.is_container:
            return GalleryItemRecord(
                id=node.id, type=FOLDER_TYPE, label=node.label, children=children
            )
        return GalleryItemRecord(
            id=node.id,
            type=node.payload.media_type.value,
            label=node.label,
            url=node.payload.url,
            alt=node.payload.alt,
        )

    def decode(self, record: GalleryItemRecord, children: tuple[Node, ...]) -> Node:
        if record.type == FOLDER_TYPE:
            return Node.container(record.label, children=children, id=record.id)
        payload = MediaRef(url=record.url, media_type=MediaType(record.type), alt=record.alt)
        return Node.leaf(record.label, payload, id=record.id)

