"""
Default configuration values for the Brand Asset Factory.

Static lookup tables (asset sizes, themes, canonical layer names, palette
defaults). Everything here is read-only module data.
"""
from types import MappingProxyType
from typing import Mapping, Tuple


# ============================================================================
# ASSET DIMENSIONS
# ============================================================================

ASSET_DIMENSIONS: Mapping[str, Mapping[str, object]] = MappingProxyType({
    # Social media
    "twitter-post": {"width": 1200, "height": 675, "name": "Twitter/X Post"},
    "twitter-card": {"width": 1080, "height": 1080, "name": "Twitter/X Card"},
    "linkedin-post": {"width": 1200, "height": 627, "name": "LinkedIn Post"},
    "instagram-square": {"width": 1080, "height": 1080, "name": "Instagram Square"},
    "instagram-story": {"width": 1080, "height": 1920, "name": "Instagram Story"},
    "instagram-reel": {"width": 1080, "height": 1920, "name": "Instagram Reel Cover"},
    "facebook-post": {"width": 1200, "height": 630, "name": "Facebook Post"},
    "youtube-thumbnail": {"width": 1280, "height": 720, "name": "YouTube Thumbnail"},
    # Product launch
    "teaser-card": {"width": 1200, "height": 675, "name": "Teaser Card"},
    "announcement-hero": {"width": 1200, "height": 675, "name": "Announcement Hero"},
    "feature-highlight": {"width": 1080, "height": 1080, "name": "Feature Highlight"},
    "countdown-card": {"width": 1080, "height": 1080, "name": "Countdown Card"},
    # Marketing
    "email-header": {"width": 600, "height": 200, "name": "Email Header"},
    "email-banner": {"width": 600, "height": 300, "name": "Email Banner"},
    "blog-featured": {"width": 1200, "height": 630, "name": "Blog Featured Image"},
    "blog-inline": {"width": 800, "height": 450, "name": "Blog Inline Image"},
    "presentation-slide": {"width": 1920, "height": 1080, "name": "Presentation Slide"},
    # Ad banners
    "banner-leaderboard": {"width": 728, "height": 90, "name": "Leaderboard Banner"},
    "banner-rectangle": {"width": 336, "height": 280, "name": "Rectangle Banner"},
    "banner-skyscraper": {"width": 160, "height": 600, "name": "Skyscraper Banner"},
})

ASSET_CATEGORIES: Mapping[str, Mapping[str, object]] = MappingProxyType({
    "social": {
        "name": "Social Graphics",
        "assets": ("twitter-post", "twitter-card", "linkedin-post",
                   "instagram-square", "instagram-story"),
    },
    "launch": {
        "name": "Product Launch",
        "assets": ("teaser-card", "announcement-hero", "feature-highlight", "countdown-card"),
    },
    "marketing": {
        "name": "Marketing Assets",
        "assets": ("email-header", "email-banner", "blog-featured", "presentation-slide"),
    },
    "banners": {
        "name": "Ad Banners",
        "assets": ("banner-leaderboard", "banner-rectangle", "banner-skyscraper"),
    },
})

BATCH_PRESETS: Mapping[str, Mapping[str, object]] = MappingProxyType({
    "all-social": {
        "name": "All Social Sizes",
        "assets": ("twitter-post", "twitter-card", "linkedin-post",
                   "instagram-square", "instagram-story"),
    },
    "launch-pack": {
        "name": "Launch Pack",
        "assets": ("teaser-card", "announcement-hero", "feature-highlight"),
    },
    "email-kit": {
        "name": "Email Kit",
        "assets": ("email-header", "email-banner"),
    },
})


# ============================================================================
# LAYER NAMING CONVENTION
# ============================================================================

LAYER_NAMES: Mapping[str, str] = MappingProxyType({
    "root": "Asset Frame",
    "content": "content",
    "headline": "headline",
    "subhead": "subhead",
    "body": "body",
    "cta": "cta",
    "tag": "tag",
    "branding": "branding",
    "logo": "logo",
    "tagline": "tagline",
    "decorative": "decorative",
    "glow": "glow",
    "accent_shape": "accent-shape",
    "pattern": "pattern",
    "background": "background",
})

# Front-to-back order enforced on the root's direct children
LAYER_ORDER: Tuple[str, ...] = (
    LAYER_NAMES["background"],
    LAYER_NAMES["decorative"],
    LAYER_NAMES["branding"],
    LAYER_NAMES["content"],
)


# ============================================================================
# COLORS & THEMES
# ============================================================================

DEFAULT_COLORS: Mapping[str, str] = MappingProxyType({
    "primary": "#3B82F6",
    "secondary": "#1E293B",
    "accent": "#10B981",
    "background_light": "#F8FAFC",
    "background_dark": "#0F172A",
    "text_light": "#F8FAFC",
    "text_dark": "#0F172A",
})

REQUIRED_COLOR_KEYS: Tuple[str, ...] = tuple(DEFAULT_COLORS.keys())

# Sentinel background key that switches the theme to a gradient fill
GRADIENT_BACKGROUND = "gradient"

THEMES: Mapping[str, Mapping[str, object]] = MappingProxyType({
    "dark": {
        "name": "Dark Mode",
        "description": "Professional, sleek",
        "background": "background_dark",
        "text": "text_light",
        "accent": "primary",
        "use_glow": True,
    },
    "light": {
        "name": "Light Mode",
        "description": "Clean, accessible",
        "background": "background_light",
        "text": "text_dark",
        "accent": "primary",
        "use_glow": False,
    },
    "bold": {
        "name": "Bold",
        "description": "High impact",
        "background": "primary",
        "text": "text_light",
        "accent": "secondary",
        "use_glow": False,
    },
    "minimal": {
        "name": "Minimal",
        "description": "Simple, elegant",
        "background": "background_light",
        "text": "primary",
        "accent": "accent",
        "use_glow": False,
    },
    "gradient": {
        "name": "Gradient",
        "description": "Dynamic, modern",
        "background": GRADIENT_BACKGROUND,
        "text": "text_light",
        "accent": "accent",
        "use_glow": True,
    },
})

# 45 degree linear gradient, top-left to bottom-right
GRADIENT_TRANSFORM = ((0.7071, 0.7071, 0.0), (-0.7071, 0.7071, 0.5))


# ============================================================================
# TYPOGRAPHY & SIZING
# ============================================================================

DEFAULT_FONT_FAMILY = "Inter"

TEXT_SIZE_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "headline": 1.0,
    "subhead": 0.65,
    "body": 0.4,
    "cta": 0.35,
    "tag": 0.25,
})

MIN_FONT_SIZE = 14
BASE_FONT_RATIO = 0.07  # of the shorter canvas side

SAFE_ZONE: Mapping[str, float] = MappingProxyType({
    "margin": 0.05,
    "min_pixels": 20,
})

LOGO_SIZE: Mapping[str, float] = MappingProxyType({
    "max_width": 0.25,
    "max_height": 0.15,
    "padding": 24,
})

LOGO_PLACEMENTS: Tuple[str, ...] = (
    "top-left", "top-right", "bottom-left", "bottom-right", "center"
)
DEFAULT_LOGO_PLACEMENT = "bottom-right"


# ============================================================================
# AUDIT & FEEDBACK
# ============================================================================

AUDIT_THRESHOLDS: Mapping[str, float] = MappingProxyType({
    "contrast_ratio_min": 4.5,
    "safe_zone_margin": 20,
    "logo_min_size": 24,
    "export_min_width": 600,
    "export_min_height": 200,
})

RATING_SCALE: Mapping[str, object] = MappingProxyType({
    "min": 1,
    "max": 5,
    "labels": MappingProxyType({
        1: "Poor",
        2: "Fair",
        3: "Good",
        4: "Very Good",
        5: "Excellent",
    }),
})

FEEDBACK_RETENTION = 1000
FEEDBACK_SUMMARY_DAYS = 30
FEEDBACK_TOP_ISSUES = 5
