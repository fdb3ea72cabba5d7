"""
Theme Engine - Applies a named theme to a generated document, resolving
palette keys against the active brand configuration.
"""
from typing import Dict, List, Mapping, Optional
import structlog

from asset_factory.config.brand_schema import BrandConfig
from asset_factory.config.defaults import (
    DEFAULT_COLORS, GRADIENT_BACKGROUND, GRADIENT_TRANSFORM, LAYER_NAMES, THEMES,
)
from asset_factory.models import (
    RGB, RGBA, ColorStop, GradientPaint, Node, SolidPaint, ThemeDefinition,
)
from asset_factory.utils import hex_to_rgb

logger = structlog.get_logger()

FALLBACK_COLOR = "#000000"


def get_theme(theme_id: str) -> Optional[ThemeDefinition]:
    """Look up a built-in theme, None if unknown."""
    theme = THEMES.get(theme_id)
    if theme is None:
        return None
    return ThemeDefinition(id=theme_id, **theme)


class ThemeEngine:
    """
    Applies themes to documents based on brand configuration.
    """

    def __init__(self):
        self.brand_config: Optional[BrandConfig] = None

    def set_brand_config(self, config: Optional[BrandConfig]) -> None:
        self.brand_config = config

    @property
    def palette(self) -> Mapping[str, str]:
        if self.brand_config is not None:
            return self.brand_config.colors
        return DEFAULT_COLORS

    def apply(self, root: Node, theme_id: str) -> None:
        """
        Apply a theme in place: background, text colors, CTA accent, then
        glow visibility. Unknown theme ids are ignored.
        """
        theme = get_theme(theme_id)
        if theme is None:
            logger.warning("unknown_theme", theme=theme_id)
            return

        self._apply_background(root, theme)
        self._apply_text_colors(root, theme)
        self._apply_accent_color(root, theme)
        self._apply_glow(root, theme)

        logger.debug("theme_applied", theme=theme_id, root=root.name)

    def resolve(self, key: str) -> RGB:
        """Resolve a palette key: brand palette, then defaults, then black."""
        hex_color = self.palette.get(key) or DEFAULT_COLORS.get(key) or FALLBACK_COLOR
        return RGB(**hex_to_rgb(hex_color))

    def _apply_background(self, root: Node, theme: ThemeDefinition) -> None:
        if theme.background == GRADIENT_BACKGROUND:
            root.fills = [self._gradient_fill("primary", "secondary")]
        else:
            root.fills = [SolidPaint(color=self.resolve(theme.background))]

    def _gradient_fill(self, start_key: str, end_key: str) -> GradientPaint:
        start = self.resolve(start_key)
        end = self.resolve(end_key)
        return GradientPaint(
            type="GRADIENT_LINEAR",
            gradient_transform=GRADIENT_TRANSFORM,
            gradient_stops=[
                ColorStop(position=0, color=RGBA(**start.model_dump(), a=1)),
                ColorStop(position=1, color=RGBA(**end.model_dump(), a=1)),
            ]
        )

    def _apply_text_colors(self, root: Node, theme: ThemeDefinition) -> None:
        text_color = self.resolve(theme.text)
        for text_node in self.find_text_layers(root):
            if text_node.name == LAYER_NAMES["cta"]:
                continue
            text_node.fills = [SolidPaint(color=text_color)]

    def _apply_accent_color(self, root: Node, theme: ThemeDefinition) -> None:
        cta = self.find_layer_by_name(root, LAYER_NAMES["cta"])
        if cta is not None and cta.is_text:
            cta.fills = [SolidPaint(color=self.resolve(theme.accent))]

    def _apply_glow(self, root: Node, theme: ThemeDefinition) -> None:
        decorative = self.find_layer_by_name(root, LAYER_NAMES["decorative"])
        if decorative is None or not decorative.is_container:
            return
        glow = self.find_layer_by_name(decorative, LAYER_NAMES["glow"])
        if glow is not None:
            glow.visible = theme.use_glow

    def find_text_layers(self, node: Node) -> List[Node]:
        text_layers: List[Node] = []

        def search(current: Node) -> None:
            if current.is_text:
                text_layers.append(current)
            for child in current.children:
                search(child)

        search(node)
        return text_layers

    def find_layer_by_name(self, node: Node, name: str) -> Optional[Node]:
        if node.name == name:
            return node
        for child in node.children:
            found = self.find_layer_by_name(child, name)
            if found is not None:
                return found
        return None

    @staticmethod
    def get_themes() -> List[ThemeDefinition]:
        return [ThemeDefinition(id=theme_id, **theme) for theme_id, theme in THEMES.items()]

    def describe_palette(self) -> Dict[str, str]:
        """Effective palette: defaults overlaid with the brand colors."""
        return {**DEFAULT_COLORS, **self.palette}


# Singleton instance
theme_engine = ThemeEngine()
