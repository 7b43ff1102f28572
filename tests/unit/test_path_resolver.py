"""Unit tests for path resolution."""

import pytest

from nodetree.core.exceptions import ParentIsLeafError, PathNotFoundError
from nodetree.services.path_resolver import PathResolver


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver()


class TestResolve:
    """Tests for PathResolver.resolve."""

    def test_top_level(self, resolver, sample_tree):
        """Test a one-element path resolves a top-level node."""
        resolution = resolver.resolve(sample_tree, ["banner"])
        assert resolution.ok
        assert resolution.node.label == "banner.png"
        assert resolution.path == ("banner",)

    def test_nested(self, resolver, sample_tree):
        """Test a deep path resolves the node at its tip."""
        resolution = resolver.resolve(sample_tree, ("docs", "guides", "intro"))
        assert resolution.node.id == "intro"

    def test_single_id_string(self, resolver, sample_tree):
        """Test a bare string is treated as a one-element path."""
        assert resolver.resolve(sample_tree, "docs").node.id == "docs"

    def test_missing_tip(self, resolver, sample_tree):
        """Test a missing final id fails with PathNotFoundError."""
        resolution = resolver.resolve(sample_tree, ("docs", "missing"))
        assert isinstance(resolution.error, PathNotFoundError)
        assert resolution.error.missing_id == "missing"
        assert resolution.node is None

    def test_missing_intermediate(self, resolver, sample_tree):
        """Test a missing intermediate id fails."""
        resolution = resolver.resolve(sample_tree, ("missing", "guides"))
        assert isinstance(resolution.error, PathNotFoundError)

    def test_ids_must_follow_the_chain(self, resolver, sample_tree):
        """Test an existing id under a different parent does not resolve."""
        resolution = resolver.resolve(sample_tree, ("docs", "intro"))
        assert isinstance(resolution.error, PathNotFoundError)

    def test_descending_through_leaf(self, resolver, sample_tree):
        """Test a path continuing past a leaf reports ParentIsLeafError."""
        resolution = resolver.resolve(sample_tree, ("banner", "anything"))
        assert isinstance(resolution.error, ParentIsLeafError)
        assert resolution.error.leaf_id == "banner"

    def test_empty_path(self, resolver, sample_tree):
        """Test the empty path names the root, which is not a node."""
        assert isinstance(resolver.resolve(sample_tree, ()).error, PathNotFoundError)

    def test_unwrap(self, resolver, sample_tree):
        """Test unwrap returns the node or raises the error."""
        assert resolver.resolve(sample_tree, ("docs",)).unwrap().id == "docs"
        with pytest.raises(PathNotFoundError):
            resolver.resolve(sample_tree, ("nope",)).unwrap()

    @pytest.mark.parametrize("path", [[""], ["docs", ""], ("docs", None)])
    def test_malformed_path(self, resolver, sample_tree, path):
        """Test malformed paths come back as PathNotFoundError results."""
        resolution = resolver.resolve(sample_tree, path)
        assert isinstance(resolution.error, PathNotFoundError)
        assert resolution.path == ()

    def test_malformed_parent_path(self, resolver, sample_tree):
        """Test resolve_parent reports malformed paths."""
        assert isinstance(resolver.resolve_parent(sample_tree, [""]).error, PathNotFoundError)


class TestResolveParent:
    """Tests for PathResolver.resolve_parent."""

    def test_top_level_parent_is_tree(self, resolver, sample_tree):
        """Test top-level nodes report the tree as parent."""
        resolution = resolver.resolve_parent(sample_tree, ("banner",))
        assert resolution.parent is sample_tree
        assert resolution.index == 1
        assert resolution.node.id == "banner"

    def test_nested_parent(self, resolver, sample_tree):
        """Test nested nodes report their container and index."""
        resolution = resolver.resolve_parent(sample_tree, ("docs", "logo"))
        assert resolution.parent.id == "docs"
        assert resolution.index == 1

    def test_missing(self, resolver, sample_tree):
        """Test missing paths carry the error."""
        resolution = resolver.resolve_parent(sample_tree, ("docs", "nope"))
        assert not resolution.ok
        assert resolution.parent is None


class TestChildrenAt:
    """Tests for PathResolver.children_at."""

    def test_root(self, resolver, sample_tree):
        """Test the empty path lists top-level nodes."""
        assert resolver.children_at(sample_tree, ()) == sample_tree.children

    def test_container(self, resolver, sample_tree):
        """Test a container path lists its children."""
        ids = [node.id for node in resolver.children_at(sample_tree, ("docs",))]
        assert ids == ["guides", "logo"]

    def test_leaf_raises(self, resolver, sample_tree):
        """Test a leaf has no children to list."""
        with pytest.raises(ParentIsLeafError):
            resolver.children_at(sample_tree, ("banner",))
