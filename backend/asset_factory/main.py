"""
Brand Asset Factory - Main FastAPI Application

Generates brand-consistent marketing assets from short copy: classifies text
roles, builds layered documents for standard asset sizes, applies themes and
audits the result against the active brand configuration.
"""
import os
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import structlog

# Load environment variables from project root or backend directory
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv()  # Try default location

from asset_factory import __version__
from asset_factory.config.brand_schema import brand_config_loader
from asset_factory.config.defaults import ASSET_DIMENSIONS, THEMES
from asset_factory.exceptions import BrandConfigError
from asset_factory.models import HealthResponse
from asset_factory.routes import audit, brand, feedback, generate, layers, themes
from asset_factory.routes.brand import activate_brand_config
from asset_factory.utils import BRAND_CONFIG_PATH, FEEDBACK_PATH

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def load_startup_brand_config() -> None:
    """Activate the brand configuration at BRAND_CONFIG_PATH, if one is set."""
    if BRAND_CONFIG_PATH is None:
        return
    try:
        config, validation = brand_config_loader.load(
            BRAND_CONFIG_PATH.read_text(encoding="utf-8")
        )
    except (OSError, BrandConfigError) as e:
        # Defaults stay active; the service still starts
        logger.error("startup_brand_config_failed", path=str(BRAND_CONFIG_PATH), error=str(e))
        return
    activate_brand_config(config)
    logger.info("startup_brand_config_loaded",
                brand=config.brand.name,
                warnings=validation.warnings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("application_starting", version=__version__)

    load_startup_brand_config()

    yield

    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI application
app = FastAPI(
    title="Brand Asset Factory",
    description="""
    Brand-consistent marketing asset generation.

    ## Features

    - **Generate**: Classify copy into headline, subhead, body, CTA and tag roles
      and build layered documents for standard asset sizes
    - **Layers**: Canonical layer naming, ordering and structure validation
    - **Themes**: Dark, light, bold, minimal and gradient themes
    - **Audit**: Seven brand compliance checks with a 0-100 score
    - **Brand**: YAML brand configuration with validation
    - **Feedback**: Reviewer feedback with rolling summaries
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS configuration
cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if os.getenv("APP_ENV") == "production" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception",
                 error=str(exc),
                 path=request.url.path,
                 method=request.method)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred. Please try again."}
    )


# Include routers
app.include_router(generate.router)
app.include_router(audit.router)
app.include_router(layers.router)
app.include_router(themes.router)
app.include_router(brand.router)
app.include_router(feedback.router)


@app.get("/", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns application status, version, and service availability.
    """
    config = brand_config_loader.get_config()
    return HealthResponse(
        status="healthy",
        version=__version__,
        services={
            "brand_config_loaded": config is not None,
            "brand": config.brand.name if config else None,
            "feedback_persistence": FEEDBACK_PATH is not None,
            "asset_types": len(ASSET_DIMENSIONS),
            "themes": len(THEMES)
        }
    )


@app.get("/api/info")
async def api_info():
    """Get API information and available endpoints."""
    return {
        "name": "Brand Asset Factory API",
        "version": __version__,
        "endpoints": {
            "health": "GET /",
            "generate": {
                "analyze": "POST /generate/analyze",
                "asset": "POST /generate/asset",
                "batch": "POST /generate/batch",
                "asset_types": "GET /generate/asset-types"
            },
            "audit": {
                "run": "POST /audit/run",
                "checks": "GET /audit/checks"
            },
            "layers": {
                "normalize": "POST /layers/normalize",
                "validate": "POST /layers/validate"
            },
            "themes": {
                "list": "GET /themes",
                "palette": "GET /themes/palette",
                "apply": "POST /themes/apply"
            },
            "brand": {
                "load": "POST /brand/load",
                "validate": "POST /brand/validate",
                "template": "GET /brand/template",
                "current": "GET /brand/current"
            },
            "feedback": {
                "submit": "POST /feedback/submit",
                "summary": "GET /feedback/summary?days=30",
                "rating_scale": "GET /feedback/rating-scale"
            },
            "docs": "GET /docs"
        }
    }


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    uvicorn.run(
        "asset_factory.main:app",
        host=host,
        port=port,
        reload=os.getenv("APP_ENV") != "production"
    )
