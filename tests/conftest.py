"""
Pytest configuration and shared fixtures.

Provides reusable sample trees, a deterministic editor, and a builder
for larger trees used by the round-trip tests.
"""

from collections.abc import Callable
from itertools import count

import pytest

from nodetree.schemas.node import (
    MediaRef,
    MenuItemType,
    MenuTarget,
    Node,
    NodeTree,
    OpenTarget,
)
from nodetree.services.tree_editor import TreeEditor


def media(name: str) -> MediaRef:
    """Media reference on the test CDN."""
    return MediaRef(url=f"https://cdn.test/media/{name}")


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Generate predictable ids: n1, n2, ..."""
    counter = count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def editor(id_factory) -> TreeEditor:
    """Tree editor with deterministic ids."""
    return TreeEditor(id_factory=id_factory)


@pytest.fixture
def sample_tree() -> NodeTree:
    """
    Small gallery-shaped tree.

    docs/
      guides/
        intro.png
      logo.png
    banner.png
    """
    return NodeTree(
        children=(
            Node.container(
                "Docs",
                id="docs",
                children=(
                    Node.container(
                        "Guides",
                        id="guides",
                        children=(Node.leaf("intro.png", media("intro.png"), id="intro"),),
                    ),
                    Node.leaf("logo.png", media("logo.png"), id="logo"),
                ),
            ),
            Node.leaf("banner.png", media("banner.png"), id="banner"),
        )
    )


def menu_node(node_id: str, label: str, url: str, *children: Node, **target) -> Node:
    """Menu item node in the shape the menu adapter produces."""
    return Node.container(
        label,
        payload=MenuTarget(url=url, **target),
        children=children,
        id=node_id,
    )


@pytest.fixture
def menu_tree() -> NodeTree:
    """Main navigation menu with one nested level."""
    return NodeTree(
        children=(
            menu_node("home", "Home", "/", type=MenuItemType.PAGE),
            menu_node("about", "About", "/about", type=MenuItemType.PAGE),
            menu_node(
                "P",
                "Products",
                "/products",
                menu_node("C", "New Arrivals", "/products/new"),
                menu_node("best", "Best Sellers", "/products/best"),
                type=MenuItemType.PAGE,
            ),
            menu_node(
                "contact",
                "Contact",
                "/contact",
                type=MenuItemType.PAGE,
                open_target=OpenTarget.BLANK,
            ),
        )
    )


@pytest.fixture
def make_tree() -> Callable[..., NodeTree]:
    """
    Build a tree of the given depth with mixed containers and leaves.

    Every container at depth < ``depth`` gets ``breadth`` container
    children plus one leaf.
    """

    def build(depth: int = 5, breadth: int = 2) -> NodeTree:
        ids = count(1)

        def level(remaining: int) -> tuple[Node, ...]:
            if remaining == 0:
                return ()
            nodes = [
                Node.container(
                    f"Folder {n}",
                    id=f"f{n}",
                    children=level(remaining - 1),
                )
                for n in (next(ids) for _ in range(breadth))
            ]
            leaf_id = next(ids)
            nodes.append(Node.leaf(f"img{leaf_id}.png", media(f"img{leaf_id}.png"), id=f"i{leaf_id}"))
            return tuple(nodes)

        return NodeTree(children=level(depth))

    return build
