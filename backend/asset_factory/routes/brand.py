"""
Brand Routes - Load, validate and inspect brand configuration.
"""
from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
import structlog

from asset_factory.config.brand_schema import (
    BrandConfig, BrandValidationResult, brand_config_loader,
)
from asset_factory.exceptions import BrandConfigError
from asset_factory.models import BrandConfigRequest
from asset_factory.services.asset_engine import asset_engine
from asset_factory.services.audit_engine import audit_engine
from asset_factory.services.theme_engine import theme_engine

logger = structlog.get_logger()

router = APIRouter(prefix="/brand", tags=["Brand"])


def activate_brand_config(config: BrandConfig) -> None:
    """Hand a loaded configuration to every service that renders or audits."""
    theme_engine.set_brand_config(config)
    audit_engine.set_brand_config(config)
    asset_engine.set_brand_config(config)


@router.post("/load")
async def load_brand_config(request: BrandConfigRequest):
    """
    Load a YAML brand configuration and make it the active one.

    Returns the normalized configuration and any validation warnings.
    Invalid YAML or a configuration with validation errors is rejected with
    400 and the active configuration is left unchanged.
    """
    try:
        config, validation = brand_config_loader.load(request.config_yaml)
    except BrandConfigError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": str(e), "errors": e.errors}
        )

    activate_brand_config(config)
    return {
        "brand": config.brand.name,
        "config": config.model_dump(),
        "warnings": validation.warnings
    }


@router.post("/validate", response_model=BrandValidationResult)
async def validate_brand_config(request: BrandConfigRequest):
    """Validate a YAML brand configuration without activating it."""
    try:
        raw = brand_config_loader.parse(request.config_yaml)
    except BrandConfigError as e:
        return BrandValidationResult(valid=False, errors=[str(e)])
    return brand_config_loader.validate(raw)


@router.get("/template", response_class=PlainTextResponse)
async def get_template():
    """Starter YAML configuration."""
    return brand_config_loader.generate_template()


@router.get("/current")
async def get_current():
    """The active brand configuration, or null when defaults are in use."""
    config = brand_config_loader.get_config()
    return {"config": config.model_dump() if config else None}
