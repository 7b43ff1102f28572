"""
Property checks over every node of generated trees.

Trees range from empty to five levels deep, in regular shapes of
several breadths and in seeded random mixes of folders and images.
"""

import random
from itertools import count

import pytest

from nodetree.core.exceptions import CycleError, PathNotFoundError
from nodetree.schemas.node import MediaRef, MenuTarget, Node, NodeTree
from nodetree.services.gallery_adapter import GalleryTreeAdapter
from nodetree.services.menu_adapter import MenuTreeAdapter
from nodetree.services.path_resolver import PathResolver
from nodetree.services.tree_serializer import TreeSerializer

resolver = PathResolver()

REGULAR_SHAPES = [(depth, breadth, None) for depth in range(6) for breadth in (1, 3)]
RANDOM_SHAPES = [(5, 3, seed) for seed in (1, 2, 3, 4)] + [(4, 5, 11), (2, 6, 23)]


def build_tree(depth: int, breadth: int, seed: int | None) -> NodeTree:
    """
    Build a gallery-shaped tree exactly ``depth`` levels deep.

    Without a seed every container gets ``breadth`` subfolders and one
    image. With a seed each container gets 1 to ``breadth`` children,
    the first always a folder and the rest a random folder/image mix.
    """
    rng = random.Random(seed)
    ids = count(1)

    def image() -> Node:
        n = next(ids)
        url = f"https://cdn.test/media/img{n}.png"
        return Node.leaf(f"img{n}.png", MediaRef(url=url), id=f"i{n}")

    def folder(remaining: int) -> Node:
        n = next(ids)
        return Node.container(f"Folder {n}", id=f"f{n}", children=level(remaining - 1))

    def level(remaining: int) -> tuple[Node, ...]:
        if remaining == 0:
            return ()
        if seed is None:
            return (*(folder(remaining) for _ in range(breadth)), image())
        width = rng.randint(1, breadth)
        return tuple(
            folder(remaining) if i == 0 or rng.random() < 0.6 else image() for i in range(width)
        )

    return NodeTree(children=level(depth))


def as_menu(nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    """Same shape and ids, every node a menu item."""
    return tuple(
        Node.container(
            node.label,
            payload=MenuTarget(url=f"/{node.id}"),
            children=as_menu(node.children),
            id=node.id,
        )
        for node in nodes
    )


@pytest.fixture(
    params=REGULAR_SHAPES + RANDOM_SHAPES,
    ids=lambda shape: "depth{}-breadth{}-{}".format(*shape[:2], shape[2] or "regular"),
)
def tree(request) -> NodeTree:
    return build_tree(*request.param)


@pytest.mark.parametrize("shape", REGULAR_SHAPES + RANDOM_SHAPES)
def test_generated_depth(shape):
    """Test every generated shape is exactly as deep as requested."""
    assert build_tree(*shape).depth == shape[0]


def test_every_path_resolves(tree):
    """Test every walked path resolves to its node."""
    for path, node in tree.walk():
        assert resolver.resolve(tree, path).node is node


def test_insert_under_every_container(editor, tree):
    """Test a node inserted under any container resolves below it."""
    parents = [()] + [path for path, node in tree.walk() if node.is_container]
    for path in parents:
        result = editor.insert_child(tree, path, Node.container("New"))
        assert result.ok
        new_node = result.inserted[0]
        assert resolver.resolve(result.tree, (*path, new_node.id)).node == new_node
        assert result.tree.size == tree.size + 1


def test_insert_under_every_leaf_rejected(editor, tree):
    """Test inserting under an image fails and keeps the tree."""
    for path, node in tree.walk():
        if node.is_leaf:
            result = editor.insert_child(tree, path, Node.container("New"))
            assert not result.ok
            assert result.tree is tree


def test_remove_every_node(editor, tree):
    """Test removal hides a node in the new tree but not the old one."""
    for path, node in tree.walk():
        result = editor.remove_node(tree, path)
        removed = result.unwrap()
        assert isinstance(resolver.resolve(removed, path).error, PathNotFoundError)
        assert resolver.resolve(tree, path).ok
        assert removed.size == tree.size - sum(1 for _ in node.iter_subtree())
        assert result.removed is node


def test_update_preserves_children_everywhere(editor, tree):
    """Test relabelling any node keeps its children identical."""
    for path, node in tree.walk():
        updated = editor.update_node(tree, path, {"label": "Renamed"}).unwrap()
        relabelled = resolver.locate(updated, path)
        assert relabelled.label == "Renamed"
        assert relabelled.children is node.children


def test_untouched_top_level_subtrees_shared(editor, tree):
    """Test an edit copies only the path to the edited node."""
    for path, _ in tree.walk():
        updated = editor.update_node(tree, path, {"label": "Renamed"}).unwrap()
        for before, after in zip(tree.children, updated.children, strict=True):
            if before.id != path[0]:
                assert after is before


def test_move_every_node_to_front_of_root(editor, tree):
    """Test any node can be moved to the top level and keeps its subtree."""
    for path, node in tree.walk():
        moved = editor.move_node(tree, path, (), 0).unwrap()
        assert moved.children[0] is node
        assert moved.size == tree.size
        assert moved.node_ids() == tree.node_ids()


def test_move_into_own_subtree_rejected(editor, tree):
    """Test no container can be moved under itself or a descendant."""
    for path, node in tree.walk():
        if node.is_leaf:
            continue
        for inner_path, inner in tree.walk():
            if inner.is_container and inner_path[: len(path)] == path:
                result = editor.move_node(tree, path, inner_path)
                assert isinstance(result.error, CycleError)
                assert result.tree is tree


def test_generic_round_trip(tree):
    """Test the generic record form reproduces the tree."""
    serializer = TreeSerializer.generic()
    assert serializer.loads(serializer.dumps(tree)) == tree


def test_gallery_round_trip(editor, tree):
    """Test the gallery record form reproduces the tree."""
    gallery = GalleryTreeAdapter(editor=editor)
    assert gallery.loads(gallery.dumps(tree)) == tree


def test_menu_round_trip(editor, tree):
    """Test the menu record form reproduces the same shape as a menu."""
    menus = MenuTreeAdapter(editor=editor)
    menu = NodeTree(children=as_menu(tree.children))
    reloaded = menus.loads(menus.dumps(menu))
    assert reloaded == menu
    assert [path for path, _ in reloaded.walk()] == [path for path, _ in tree.walk()]
