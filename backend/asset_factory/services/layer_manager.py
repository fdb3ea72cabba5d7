"""
Layer Manager - Canonical layer naming, ordering and structure validation
for generated documents.
"""
from typing import Dict, List, Optional, Union
import structlog

from asset_factory.config.defaults import LAYER_NAMES, LAYER_ORDER
from asset_factory.models import LayerValidationResult, Node, NodeKind

logger = structlog.get_logger()


# Canonical names that count as structural keys during validation
STRUCTURE_KEYS = frozenset({
    LAYER_NAMES["content"],
    LAYER_NAMES["branding"],
    LAYER_NAMES["decorative"],
    LAYER_NAMES["background"],
    LAYER_NAMES["headline"],
    LAYER_NAMES["subhead"],
    LAYER_NAMES["body"],
    LAYER_NAMES["cta"],
    LAYER_NAMES["tag"],
    LAYER_NAMES["logo"],
})


def canonical_name(node: Node) -> Optional[str]:
    """
    Map a node onto the canonical vocabulary from its kind and current name.
    Returns None when no rule applies.
    """
    name = node.name.lower()

    if node.is_text:
        if "head" in name and "sub" not in name:
            return LAYER_NAMES["headline"]
        if "sub" in name:
            return LAYER_NAMES["subhead"]
        if "body" in name or "description" in name:
            return LAYER_NAMES["body"]
        if "cta" in name or "button" in name:
            return LAYER_NAMES["cta"]
        if "tag" in name or "label" in name:
            return LAYER_NAMES["tag"]

    if node.is_container:
        if "content" in name or "text" in name:
            return LAYER_NAMES["content"]
        if "brand" in name or "logo" in name:
            return LAYER_NAMES["branding"]
        if "decor" in name or "effect" in name:
            return LAYER_NAMES["decorative"]
        if "background" in name or "bg" in name:
            return LAYER_NAMES["background"]

    if "logo" in name and not node.is_text:
        return LAYER_NAMES["logo"]

    if node.kind == NodeKind.ELLIPSE and ("glow" in name or "blur" in name):
        return LAYER_NAMES["glow"]

    return None


class LayerManager:
    """
    Manages layer naming, organization and structure validation.
    """

    def apply_naming(self, root: Node) -> None:
        """Rename all descendants canonically, then order the root's children."""
        renamed = self._normalize_layer_names(root)
        self.organize_layer_order(root)
        logger.debug("layer_naming_applied", root=root.name, renamed=renamed)

    def _normalize_layer_names(self, node: Node) -> int:
        renamed = 0
        for child in node.children:
            normalized = canonical_name(child)
            if normalized and normalized != child.name:
                child.name = normalized
                renamed += 1
            if child.is_container:
                renamed += self._normalize_layer_names(child)
        return renamed

    def organize_layer_order(self, root: Node) -> None:
        """
        Move background, decorative, branding and content (first of each) to
        the front in that order; all other children keep their relative order.
        """
        if not root.children:
            return

        ordered: List[Node] = []
        for layer_name in LAYER_ORDER:
            match = next((c for c in root.children if c.name == layer_name), None)
            if match is not None:
                ordered.append(match)

        ordered_ids = {id(c) for c in ordered}
        others = [c for c in root.children if id(c) not in ordered_ids]
        root.children = ordered + others

    def validate(self, root: Node) -> LayerValidationResult:
        """
        Validate the layer structure of a document.

        The root must be a FRAME. A missing content group is an error, a
        missing branding group a warning and a missing decorative group a
        suggestion.
        """
        errors: List[str] = []
        warnings: List[str] = []
        suggestions: List[str] = []

        if root.kind != NodeKind.FRAME:
            errors.append("Root node must be a FRAME")
            return LayerValidationResult(
                valid=False, errors=errors, warnings=warnings, suggestions=suggestions
            )

        structure = self.map_structure(root)

        if LAYER_NAMES["content"] not in structure:
            errors.append(f"Missing required layer: {LAYER_NAMES['content']}")
        if LAYER_NAMES["branding"] not in structure:
            warnings.append(f"Missing layer: {LAYER_NAMES['branding']}")
        if LAYER_NAMES["decorative"] not in structure:
            suggestions.append("Consider adding a decorative group")

        return LayerValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions
        )

    def map_structure(self, root: Node) -> Dict[str, Union[bool, Dict[str, bool]]]:
        """
        Canonical keys of the root's children. Containers map to the set of
        canonical keys among their own children, leaves map to True.
        """
        structure: Dict[str, Union[bool, Dict[str, bool]]] = {}
        for child in root.children:
            if child.name not in STRUCTURE_KEYS:
                continue
            if child.is_container:
                structure[child.name] = {
                    grandchild.name: True
                    for grandchild in child.children
                    if grandchild.name in STRUCTURE_KEYS
                }
            else:
                structure[child.name] = True
        return structure

    def find_layer(self, root: Node, layer_name: str) -> Optional[Node]:
        """First node named ``layer_name`` in pre-order, the root included."""
        return next((node for node in root.walk() if node.name == layer_name), None)

    def get_text_layers(self, root: Node) -> List[Node]:
        """All text nodes in pre-order."""
        return [node for node in root.walk() if node.is_text]


# Singleton instance
layer_manager = LayerManager()
