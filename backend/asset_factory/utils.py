"""
Utility functions for the Brand Asset Factory.
"""
import os
import re
import uuid
from pathlib import Path
from typing import Dict, Optional, Tuple
import structlog

logger = structlog.get_logger()

# Paths
FEEDBACK_PATH: Optional[Path] = (
    Path(os.environ["FEEDBACK_PATH"]) if os.getenv("FEEDBACK_PATH") else None
)
BRAND_CONFIG_PATH: Optional[Path] = (
    Path(os.environ["BRAND_CONFIG_PATH"]) if os.getenv("BRAND_CONFIG_PATH") else None
)

HEX6_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
HEX_COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
RGB_FUNC_PATTERN = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)(?:\s*,\s*[\d.]+)?\s*\)$"
)


def generate_asset_id() -> str:
    """Generate a unique asset ID."""
    return str(uuid.uuid4())[:12]


def parse_canvas_size(canvas: str) -> Tuple[int, int]:
    """Parse canvas size string like '1080x1920' into (width, height)."""
    match = re.fullmatch(r"(\d+)x(\d+)", canvas)
    if not match:
        raise ValueError(f"Invalid canvas size format: {canvas}")
    return int(match.group(1)), int(match.group(2))


def hex_to_rgb(hex_color: str) -> Dict[str, float]:
    """
    Convert a 6-digit hex color (leading '#' optional) to 0-1 RGB channels.
    Anything else resolves to black.
    """
    match = HEX6_PATTERN.match(hex_color or "")
    if not match:
        logger.debug("malformed_color", value=hex_color)
        return {"r": 0.0, "g": 0.0, "b": 0.0}
    r, g, b = (int(group, 16) / 255 for group in match.groups())
    return {"r": r, "g": g, "b": b}


def is_valid_color(color: str) -> bool:
    """Check a brand color: #RGB, #RRGGBB, rgb(r,g,b) or rgba(r,g,b,a)."""
    if not isinstance(color, str):
        return False
    return bool(HEX_COLOR_PATTERN.match(color) or RGB_FUNC_PATTERN.match(color))


def normalize_color(color: str) -> str:
    """
    Normalize a valid brand color to #RRGGBB.

    Short hex is expanded, rgb()/rgba() channels are clamped to 0-255 and the
    alpha channel is dropped. Raises ValueError for anything is_valid_color
    rejects.
    """
    if not is_valid_color(color):
        raise ValueError(f"Invalid color format: {color}")

    rgb_match = RGB_FUNC_PATTERN.match(color)
    if rgb_match:
        r, g, b = (min(int(c), 255) for c in rgb_match.groups())
        return f"#{r:02X}{g:02X}{b:02X}"

    hex_digits = color.lstrip("#")
    if len(hex_digits) == 3:
        hex_digits = "".join(c * 2 for c in hex_digits)
    return f"#{hex_digits.upper()}"


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())
