"""
Tests for canonical layer naming, ordering and structure validation.
"""
import pytest

from asset_factory.models import Node, NodeKind
from asset_factory.services.layer_manager import LayerManager, canonical_name


@pytest.fixture
def manager():
    return LayerManager()


def names(node):
    return [n.name for n in node.walk()]


class TestCanonicalName:
    """Tests for the keyword naming table."""

    @pytest.mark.parametrize("kind,name,expected", [
        (NodeKind.TEXT, "Main Headline", "headline"),
        (NodeKind.TEXT, "Sub Heading", "subhead"),
        (NodeKind.TEXT, "Product description", "body"),
        (NodeKind.TEXT, "Primary Button", "cta"),
        (NodeKind.TEXT, "Price label", "tag"),
        (NodeKind.FRAME, "Text Stack", "content"),
        (NodeKind.GROUP, "Brand Lockup", "branding"),
        (NodeKind.FRAME, "Effects", "decorative"),
        (NodeKind.FRAME, "bg layer", "background"),
        (NodeKind.VECTOR, "Logo Mark", "logo"),
        (NodeKind.ELLIPSE, "Soft Blur", "glow"),
    ])
    def test_rules(self, kind, name, expected):
        """Test each naming rule."""
        assert canonical_name(Node(kind=kind, name=name)) == expected

    def test_no_match(self):
        """Test a node no rule matches keeps its name."""
        assert canonical_name(Node(kind=NodeKind.RECTANGLE, name="Divider")) is None

    def test_glow_requires_ellipse(self):
        """Test glow naming requires an ellipse."""
        assert canonical_name(Node(kind=NodeKind.RECTANGLE, name="Glow")) is None

    def test_text_logo_is_not_renamed_to_logo(self):
        """Test text logo is not renamed to logo."""
        assert canonical_name(Node(kind=NodeKind.TEXT, name="Logo text")) is None

    def test_container_named_logo_is_branding(self):
        """Test container named logo is branding."""
        assert canonical_name(Node(kind=NodeKind.FRAME, name="Logo")) == "branding"


class TestApplyNaming:
    """Tests for recursive renaming and ordering."""

    def test_renames_descendants(self, manager, messy_tree):
        """Test naming renames nested layers."""
        manager.apply_naming(messy_tree)
        assert names(messy_tree) == [
            "Hero",
            "background",
            "decorative", "glow",
            "branding", "logo",
            "content", "headline", "subhead", "body", "cta",
            "Extra",
        ]

    def test_root_is_not_renamed(self, manager):
        """Test root is not renamed."""
        root = Node(kind=NodeKind.FRAME, name="Text Frame")
        manager.apply_naming(root)
        assert root.name == "Text Frame"

    def test_idempotent(self, manager, messy_tree):
        """Test naming twice changes nothing."""
        manager.apply_naming(messy_tree)
        once = names(messy_tree)
        manager.apply_naming(messy_tree)
        assert names(messy_tree) == once


class TestOrganizeLayerOrder:
    """Tests for root child ordering."""

    def test_permutation_keeps_other_order(self, manager):
        """Test permutation keeps other order."""
        children = [
            Node(kind=NodeKind.RECTANGLE, name="A"),
            Node(kind=NodeKind.FRAME, name="content"),
            Node(kind=NodeKind.RECTANGLE, name="B"),
            Node(kind=NodeKind.FRAME, name="background"),
            Node(kind=NodeKind.RECTANGLE, name="C"),
            Node(kind=NodeKind.FRAME, name="decorative"),
        ]
        root = Node(kind=NodeKind.FRAME, name="root", children=list(children))
        manager.organize_layer_order(root)

        assert [c.name for c in root.children] == [
            "background", "decorative", "content", "A", "B", "C"
        ]
        assert {id(c) for c in root.children} == {id(c) for c in children}

    def test_duplicate_names_keep_first(self, manager):
        """Test duplicate names keep first."""
        first = Node(kind=NodeKind.FRAME, name="content")
        second = Node(kind=NodeKind.FRAME, name="content")
        other = Node(kind=NodeKind.RECTANGLE, name="X")
        root = Node(kind=NodeKind.FRAME, children=[other, first, second])
        manager.organize_layer_order(root)
        assert root.children[0] is first
        assert root.children[1:] == [other, second]

    def test_empty_root(self, manager):
        """Test ordering a frame with no children."""
        root = Node(kind=NodeKind.FRAME)
        manager.organize_layer_order(root)
        assert root.children == []


class TestValidate:
    """Tests for structure validation."""

    def test_valid_after_naming(self, manager, messy_tree):
        """Test a named tree validates."""
        manager.apply_naming(messy_tree)
        result = manager.validate(messy_tree)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.suggestions == []

    def test_missing_layers(self, manager, messy_tree):
        """Test missing layers produce errors and warnings."""
        result = manager.validate(messy_tree)
        assert not result.valid
        assert result.errors == ["Missing required layer: content"]
        assert result.warnings == ["Missing layer: branding"]
        assert result.suggestions == ["Consider adding a decorative group"]

    def test_root_must_be_frame(self, manager):
        """Test root must be frame."""
        result = manager.validate(Node(kind=NodeKind.GROUP, name="content"))
        assert not result.valid
        assert result.errors == ["Root node must be a FRAME"]
        assert result.warnings == []

    def test_map_structure(self, manager, messy_tree):
        """Test the structure map of a named tree."""
        manager.apply_naming(messy_tree)
        structure = manager.map_structure(messy_tree)
        assert structure == {
            "background": {},
            "decorative": {},
            "branding": {"logo": True},
            "content": {"headline": True, "subhead": True, "body": True, "cta": True},
        }


class TestLookup:
    """Tests for layer lookup."""

    def test_find_layer(self, manager, messy_tree):
        """Test finding a layer by name."""
        manager.apply_naming(messy_tree)
        logo = manager.find_layer(messy_tree, "logo")
        assert logo is not None
        assert logo.kind == NodeKind.VECTOR

    def test_find_layer_includes_root(self, manager, messy_tree):
        """Test find layer includes root."""
        assert manager.find_layer(messy_tree, "Hero") is messy_tree

    def test_find_layer_missing(self, manager, messy_tree):
        """Test finding a layer that is absent."""
        assert manager.find_layer(messy_tree, "pattern") is None

    def test_text_layers_in_preorder(self, manager, messy_tree):
        """Test text layers in preorder."""
        texts = manager.get_text_layers(messy_tree)
        assert [t.characters for t in texts] == [
            "Launch Day", "Everything is new", "Details inside.", "Get started"
        ]
