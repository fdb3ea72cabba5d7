"""
Layer Routes - Canonical naming and structure validation.
"""
from fastapi import APIRouter
import structlog

from asset_factory.models import LayerValidationResult, Node
from asset_factory.services.layer_manager import layer_manager

logger = structlog.get_logger()

router = APIRouter(prefix="/layers", tags=["Layers"])


@router.post("/normalize", response_model=Node)
async def normalize_layers(document: Node):
    """
    Rename layers to the canonical vocabulary and reorder the root's
    children (background, decorative, branding, content, then the rest).

    Normalizing an already normalized document changes nothing.
    """
    layer_manager.apply_naming(document)
    return document


@router.post("/validate")
async def validate_layers(document: Node):
    """Validate a document's layer structure and return its structure map."""
    result: LayerValidationResult = layer_manager.validate(document)
    logger.info(
        "layers_validated",
        root=document.name,
        valid=result.valid,
        errors=len(result.errors)
    )
    return {
        **result.model_dump(),
        "structure": layer_manager.map_structure(document)
    }
