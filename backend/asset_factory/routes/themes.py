"""
Theme Routes - Built-in themes and theme application.
"""
from typing import List

from fastapi import APIRouter
import structlog

from asset_factory.models import ApplyThemeRequest, Node, ThemeDefinition
from asset_factory.services.theme_engine import get_theme, theme_engine

logger = structlog.get_logger()

router = APIRouter(prefix="/themes", tags=["Themes"])


@router.get("", response_model=List[ThemeDefinition])
async def list_themes():
    """List the built-in themes."""
    return theme_engine.get_themes()


@router.get("/palette")
async def get_palette():
    """Effective palette: defaults overlaid with the active brand colors."""
    return theme_engine.describe_palette()


@router.post("/apply", response_model=Node)
async def apply_theme(request: ApplyThemeRequest):
    """
    Apply a theme to a document and return the updated document.

    Background, text colors, the CTA accent and glow visibility are updated
    in place. An unknown theme id leaves the document unchanged.
    """
    theme_engine.apply(request.document, request.theme)
    logger.info(
        "theme_request_completed",
        theme=request.theme,
        known=get_theme(request.theme) is not None,
        root=request.document.name
    )
    return request.document
