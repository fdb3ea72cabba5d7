"""
Generate Routes - Text analysis and asset generation.
"""
from typing import List, Optional

from fastapi import APIRouter, HTTPException
import structlog

from asset_factory.config.defaults import ASSET_CATEGORIES, BATCH_PRESETS
from asset_factory.models import (
    AnalyzeRequest, AnalyzeResponse, AuditResult, BatchGenerateRequest,
    BatchGenerateResponse, BatchGenerateResult, GenerateAssetRequest,
    GenerateAssetResponse, Node, TextInput,
)
from asset_factory.services.asset_engine import asset_engine
from asset_factory.services.audit_engine import audit_engine
from asset_factory.services.layer_manager import layer_manager
from asset_factory.services.text_analyzer import text_analyzer
from asset_factory.services.theme_engine import theme_engine

logger = structlog.get_logger()

router = APIRouter(prefix="/generate", tags=["Generate"])


class UnknownAssetTypeError(LookupError):
    pass


def build_asset(
    asset_type: str,
    content: List[TextInput],
    theme: Optional[str] = None,
    logo_placement: Optional[str] = None
) -> tuple[Node, AuditResult]:
    """
    Full pipeline: analyze copy, generate, name layers, apply theme, audit.

    Raises:
        UnknownAssetTypeError: if the asset type has no known dimensions
    """
    analyzed = text_analyzer.analyze(content)
    node = asset_engine.generate(
        asset_type,
        analyzed,
        theme=theme,
        logo_placement=logo_placement
    )
    if node is None:
        raise UnknownAssetTypeError(f"Unknown asset type: {asset_type}")

    layer_manager.apply_naming(node)
    if theme:
        theme_engine.apply(node, theme)
    return node, audit_engine.audit(node)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_text(request: AnalyzeRequest):
    """
    Classify text fragments into headline, subhead, body, CTA and tag roles.

    The result is ordered tag, headline, subhead, body, cta and holds at
    most one inferred headline.
    """
    items = text_analyzer.analyze(request.content)
    return AnalyzeResponse(items=items)


@router.post("/asset", response_model=GenerateAssetResponse)
async def generate_asset(request: GenerateAssetRequest):
    """
    Generate a single asset.

    Runs text analysis, builds the document, applies canonical layer naming
    and the requested theme, and returns the document with its audit result.
    """
    try:
        node, audit_result = build_asset(
            request.asset_type,
            request.content,
            theme=request.theme,
            logo_placement=request.options.logo_placement
        )

        logger.info(
            "asset_request_completed",
            asset_type=request.asset_type,
            node_id=node.id,
            score=audit_result.score,
            passed=audit_result.passed
        )

        return GenerateAssetResponse(
            node_id=node.id,
            name=node.name,
            dimensions={"width": int(node.width), "height": int(node.height)},
            document=node,
            audit_result=audit_result
        )

    except UnknownAssetTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("asset_generation_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Asset generation failed: {str(e)}"
        )


@router.post("/batch", response_model=BatchGenerateResponse)
async def batch_generate(request: BatchGenerateRequest):
    """
    Generate the same copy across several asset types.

    Asset types come from the request, from a named preset, or both. A
    failure for one type is reported in its result and does not stop the
    batch.
    """
    asset_types = list(request.asset_types)
    if request.preset:
        preset = BATCH_PRESETS.get(request.preset)
        if preset is None:
            raise HTTPException(status_code=404, detail=f"Unknown preset: {request.preset}")
        asset_types.extend(t for t in preset["assets"] if t not in asset_types)

    results: List[BatchGenerateResult] = []
    for asset_type in asset_types:
        try:
            node, audit_result = build_asset(asset_type, request.content, theme=request.theme)
            results.append(BatchGenerateResult(
                asset_type=asset_type,
                success=True,
                node_id=node.id,
                score=audit_result.score
            ))
        except Exception as e:
            logger.warning("batch_item_failed", asset_type=asset_type, error=str(e))
            results.append(BatchGenerateResult(
                asset_type=asset_type,
                success=False,
                error=str(e)
            ))

    logger.info(
        "batch_generated",
        total=len(results),
        succeeded=sum(1 for r in results if r.success)
    )
    return BatchGenerateResponse(results=results)


@router.get("/asset-types")
async def get_asset_types():
    """List asset types with dimensions, categories and batch presets."""
    return {
        "asset_types": asset_engine.list_asset_types(),
        "categories": {k: {"name": v["name"], "assets": list(v["assets"])} for k, v in ASSET_CATEGORIES.items()},
        "presets": {k: {"name": v["name"], "assets": list(v["assets"])} for k, v in BATCH_PRESETS.items()},
    }
