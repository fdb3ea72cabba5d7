"""
Asset Engine - Builds document trees for a given asset type from classified
copy and the active brand configuration.

Generated documents are kept in memory so they can be audited later by id.
"""
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple
import structlog

from asset_factory.config.brand_schema import BrandConfig
from asset_factory.config.defaults import (
    ASSET_DIMENSIONS, BASE_FONT_RATIO, DEFAULT_COLORS, DEFAULT_FONT_FAMILY,
    DEFAULT_LOGO_PLACEMENT, GRADIENT_TRANSFORM, LAYER_NAMES, LOGO_SIZE, MIN_FONT_SIZE, TEXT_SIZE_MULTIPLIERS,
)
from asset_factory.models import (
    RGB, RGBA, ClassifiedText, ColorStop, GradientPaint, Node, NodeKind, Role, SolidPaint,
)
from asset_factory.utils import hex_to_rgb, parse_canvas_size

logger = structlog.get_logger()

# Oldest generated documents are dropped beyond this many
MAX_REGISTERED_DOCUMENTS = 200

CONTENT_PADDING = 48
GLOW_THEMES = ("dark", "gradient")
LOGO_BASE_SIZE = (120, 40)


class AssetEngine:
    """
    Document tree generator.
    """

    def __init__(self):
        self.brand_config: Optional[BrandConfig] = None
        self.documents: "OrderedDict[str, Node]" = OrderedDict()

    def set_brand_config(self, config: Optional[BrandConfig]) -> None:
        self.brand_config = config

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    @staticmethod
    def get_dimensions(asset_type: str) -> Optional[Tuple[int, int]]:
        """
        Pixel size of an asset type. Custom 'WIDTHxHEIGHT' types are accepted;
        anything else unknown returns None.
        """
        info = ASSET_DIMENSIONS.get(asset_type)
        if info is not None:
            return int(info["width"]), int(info["height"])
        try:
            return parse_canvas_size(asset_type)
        except ValueError:
            return None

    def get_document(self, node_id: str) -> Optional[Node]:
        return self.documents.get(node_id)

    def register(self, root: Node) -> None:
        self.documents[root.id] = root
        while len(self.documents) > MAX_REGISTERED_DOCUMENTS:
            self.documents.popitem(last=False)

    def color(self, key: str) -> RGB:
        colors = self.brand_config.colors if self.brand_config else DEFAULT_COLORS
        return RGB(**hex_to_rgb(colors.get(key) or DEFAULT_COLORS.get(key) or "#000000"))

    # ========================================================================
    # GENERATION
    # ========================================================================

    def generate(
        self,
        asset_type: str,
        content: Sequence[ClassifiedText],
        theme: Optional[str] = None,
        logo_placement: Optional[str] = None
    ) -> Optional[Node]:
        """
        Build a document for an asset type.

        Args:
            asset_type: Key of ASSET_DIMENSIONS or a 'WIDTHxHEIGHT' string
            content: Classified copy, in display order
            theme: Theme id used for initial colors and the glow layer
            logo_placement: Corner or center for the branding group

        Returns:
            Root FRAME node, or None for an unknown asset type
        """
        dimensions = self.get_dimensions(asset_type)
        if dimensions is None:
            logger.warning("unknown_asset_type", asset_type=asset_type)
            return None

        width, height = dimensions
        info = ASSET_DIMENSIONS.get(asset_type)
        root = Node(
            kind=NodeKind.FRAME,
            name=str(info["name"]) if info else LAYER_NAMES["root"],
            width=width,
            height=height,
            fills=[self._background_fill(theme)]
        )

        root.children.append(self._create_decorative_group(width, height, theme))
        root.children.append(self._create_content_group(content, width, height, theme))
        root.children.append(self._create_branding_group(width, height, logo_placement))

        self.register(root)
        logger.info(
            "asset_generated",
            asset_type=asset_type,
            node_id=root.id,
            width=width,
            height=height,
            text_layers=len(content)
        )
        return root

    def _theme_keys(self, theme: Optional[str]) -> Dict[str, str]:
        if theme in ("light", "minimal"):
            return {"background": "background_light", "text": "text_dark"}
        if theme == "bold":
            return {"background": "primary", "text": "text_light"}
        return {"background": "background_dark", "text": "text_light"}

    def _background_fill(self, theme: Optional[str]):
        if theme == "gradient":
            start, end = self.color("primary"), self.color("secondary")
            return GradientPaint(
                type="GRADIENT_LINEAR",
                gradient_transform=GRADIENT_TRANSFORM,
                gradient_stops=[
                    ColorStop(position=0, color=RGBA(**start.model_dump())),
                    ColorStop(position=1, color=RGBA(**end.model_dump())),
                ]
            )
        return SolidPaint(color=self.color(self._theme_keys(theme)["background"]))

    def _create_decorative_group(self, width: int, height: int, theme: Optional[str]) -> Node:
        group = Node(
            kind=NodeKind.FRAME,
            name=LAYER_NAMES["decorative"],
            width=width,
            height=height
        )
        if theme in GLOW_THEMES:
            group.children.append(self._create_glow(width, height))
        return group

    def _create_glow(self, width: int, height: int) -> Node:
        size = min(width, height) * 1.2
        primary = self.color("primary").model_dump()
        return Node(
            kind=NodeKind.ELLIPSE,
            name=LAYER_NAMES["glow"],
            width=size,
            height=size,
            x=-size * 0.3,
            y=-size * 0.3,
            opacity=0.8,
            fills=[GradientPaint(
                type="GRADIENT_RADIAL",
                gradient_transform=((1.0, 0.0, 0.5), (0.0, 1.0, 0.5)),
                gradient_stops=[
                    ColorStop(position=0, color=RGBA(**primary, a=0.4)),
                    ColorStop(position=0.5, color=RGBA(**primary, a=0.1)),
                    ColorStop(position=1, color=RGBA(**primary, a=0)),
                ]
            )]
        )

    def _create_content_group(
        self,
        content: Sequence[ClassifiedText],
        width: int,
        height: int,
        theme: Optional[str]
    ) -> Node:
        group = Node(
            kind=NodeKind.FRAME,
            name=LAYER_NAMES["content"],
            width=width,
            height=height
        )
        base_font_size = min(width, height) * BASE_FONT_RATIO
        max_width = max(width - CONTENT_PADDING * 2, 0)
        text_key = self._theme_keys(theme)["text"]

        for item in content:
            group.children.append(
                self._create_text_node(item, base_font_size, max_width, text_key)
            )
        return group

    def _create_text_node(
        self,
        item: ClassifiedText,
        base_font_size: float,
        max_width: float,
        text_key: str
    ) -> Node:
        multiplier = TEXT_SIZE_MULTIPLIERS.get(item.role.value, 0.5)
        font_size = max(int(base_font_size * multiplier + 0.5), MIN_FONT_SIZE)
        color_key = "accent" if item.role == Role.CTA else text_key

        typography = self.brand_config.typography if self.brand_config else None
        if item.role == Role.HEADLINE:
            family = typography.headline_font if typography else DEFAULT_FONT_FAMILY
        else:
            family = typography.body_font if typography else DEFAULT_FONT_FAMILY

        return Node(
            kind=NodeKind.TEXT,
            name=item.role.value,
            characters=item.text,
            font_family=family,
            font_style="Bold" if item.role == Role.HEADLINE else "Regular",
            font_size=font_size,
            width=max_width,
            fills=[SolidPaint(color=self.color(color_key))]
        )

    def _create_branding_group(
        self,
        width: int,
        height: int,
        logo_placement: Optional[str]
    ) -> Node:
        logo_width = min(LOGO_BASE_SIZE[0], width * LOGO_SIZE["max_width"])
        logo_height = min(LOGO_BASE_SIZE[1], height * LOGO_SIZE["max_height"])
        logo = Node(
            kind=NodeKind.VECTOR,
            name=LAYER_NAMES["logo"],
            width=logo_width,
            height=logo_height,
            fills=[SolidPaint(color=self.color("text_light"))]
        )
        group = Node(
            kind=NodeKind.FRAME,
            name=LAYER_NAMES["branding"],
            width=logo_width,
            height=logo_height,
            children=[logo]
        )
        group.x, group.y = self._place(
            logo_placement or DEFAULT_LOGO_PLACEMENT,
            width, height, logo_width, logo_height
        )
        return group

    @staticmethod
    def _place(
        placement: str,
        width: float,
        height: float,
        item_width: float,
        item_height: float
    ) -> Tuple[float, float]:
        padding = LOGO_SIZE["padding"]
        if placement == "top-left":
            return padding, padding
        if placement == "top-right":
            return width - item_width - padding, padding
        if placement == "bottom-left":
            return padding, height - item_height - padding
        if placement == "center":
            return (width - item_width) / 2, (height - item_height) / 2
        return width - item_width - padding, height - item_height - padding

    def list_asset_types(self) -> List[Dict[str, object]]:
        return [
            {"id": asset_type, **dict(info)}
            for asset_type, info in ASSET_DIMENSIONS.items()
        ]


# Singleton instance
asset_engine = AssetEngine()
