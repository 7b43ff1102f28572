"""Unit tests for breadcrumb derivation."""

from nodetree.services.breadcrumb_navigator import BreadcrumbNavigator


class TestBreadcrumbsFor:
    """Tests for BreadcrumbNavigator.breadcrumbs_for."""

    def test_trail_root_to_tip(self, sample_tree):
        """Test each prefix contributes one crumb, in order."""
        trail = BreadcrumbNavigator().breadcrumbs_for(sample_tree, ("docs", "guides"))
        assert trail.pairs == [("docs", "Docs"), ("guides", "Guides")]
        assert not trail.reset_to_root

    def test_crumb_paths_are_prefixes(self, sample_tree):
        """Test each crumb carries the path to jump to."""
        trail = BreadcrumbNavigator().breadcrumbs_for(sample_tree, ("docs", "guides", "intro"))
        assert [item.path for item in trail.items] == [
            ("docs",),
            ("docs", "guides"),
            ("docs", "guides", "intro"),
        ]
        assert trail.current.id == "intro"

    def test_root_path(self, sample_tree):
        """Test the root view has an empty trail and is not stale."""
        trail = BreadcrumbNavigator(root_label="Gallery").breadcrumbs_for(sample_tree, ())
        assert trail.items == ()
        assert trail.root_label == "Gallery"
        assert trail.current is None
        assert not trail.reset_to_root

    def test_stale_path_signals_reset(self, sample_tree):
        """Test a path that no longer resolves asks for a reset instead of raising."""
        trail = BreadcrumbNavigator().breadcrumbs_for(sample_tree, ("docs", "deleted"))
        assert trail.reset_to_root
        assert trail.items == ()

    def test_path_through_leaf_is_stale(self, sample_tree):
        """Test descending past a leaf is treated as stale."""
        trail = BreadcrumbNavigator().breadcrumbs_for(sample_tree, ("banner", "x"))
        assert trail.reset_to_root

    def test_malformed_path_resets(self, sample_tree):
        """Test a malformed view path resets to the root instead of raising."""
        trail = BreadcrumbNavigator().breadcrumbs_for(sample_tree, ("docs", ""))
        assert trail.reset_to_root
        assert trail.items == ()


class TestRecover:
    """Tests for BreadcrumbNavigator.recover."""

    def test_valid_path_kept(self, sample_tree):
        """Test a valid view path is returned unchanged."""
        trail, path = BreadcrumbNavigator().recover(sample_tree, ["docs"])
        assert path == ("docs",)
        assert trail.pairs == [("docs", "Docs")]

    def test_stale_path_reset(self, editor, sample_tree):
        """Test the view path falls back to root after its folder is removed."""
        tree = editor.remove_node(sample_tree, ("docs",)).tree
        trail, path = BreadcrumbNavigator().recover(tree, ("docs", "guides"))
        assert path == ()
        assert trail.reset_to_root

    def test_generator_path_kept(self, sample_tree):
        """Test a one-shot iterable view path is returned as a tuple."""
        trail, path = BreadcrumbNavigator().recover(sample_tree, iter(["docs", "guides"]))
        assert path == ("docs", "guides")
        assert trail.current.id == "guides"

    def test_malformed_path_reset(self, sample_tree):
        """Test a malformed view path recovers to the root."""
        _, path = BreadcrumbNavigator().recover(sample_tree, [""])
        assert path == ()
