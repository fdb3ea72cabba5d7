"""
Brand configuration schema and loader.

Brand configs are YAML documents with ``brand``, ``colors``, ``typography``,
``logo``, ``effects`` and ``shapes`` sections.
"""
from typing import Any, Dict, List, Literal, Optional, Tuple

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from asset_factory.config.defaults import (
    DEFAULT_FONT_FAMILY, LOGO_PLACEMENTS, REQUIRED_COLOR_KEYS,
)
from asset_factory.exceptions import BrandConfigError
from asset_factory.utils import is_valid_color, normalize_color

logger = structlog.get_logger()

LogoPlacement = Literal["top-left", "top-right", "bottom-left", "bottom-right", "center"]


# ============================================================================
# SCHEMA
# ============================================================================

class SectionModel(BaseModel):
    """Config section in which a key left blank in YAML takes its default."""

    @field_validator("*", mode="before")
    @classmethod
    def null_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class BrandInfo(BaseModel):
    name: str
    tagline: Optional[str] = ""


class TypographyConfig(SectionModel):
    headline_font: str = DEFAULT_FONT_FAMILY
    body_font: str = DEFAULT_FONT_FAMILY
    headline_sizes: List[int] = [48, 36, 28, 24]
    body_sizes: List[int] = [18, 16, 14]


class LogoConfig(SectionModel):
    primary: str = ""
    mark: Optional[str] = None
    wordmark: Optional[str] = None
    placements: List[LogoPlacement] = []


class GradientEffect(BaseModel):
    name: str
    type: Literal["linear", "radial"] = "linear"
    angle: Optional[float] = None
    colors: List[str] = []


class ShadowEffect(BaseModel):
    name: str
    offset: Tuple[float, float] = (0, 0)
    blur: float = 0
    color: str = "#000000"


class EffectsConfig(SectionModel):
    gradients: List[GradientEffect] = []
    shadows: List[ShadowEffect] = []


class ShapesConfig(SectionModel):
    decorative: List[str] = []
    containers: List[str] = []


class BrandConfig(BaseModel):
    """A validated brand configuration. Colors are normalized to #RRGGBB."""
    brand: BrandInfo
    colors: Dict[str, str]
    typography: TypographyConfig
    logo: Optional[LogoConfig] = None
    effects: EffectsConfig = Field(default_factory=EffectsConfig)
    shapes: ShapesConfig = Field(default_factory=ShapesConfig)


class BrandValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []


# ============================================================================
# LOADER
# ============================================================================

class BrandConfigLoader:
    """Parses, validates and normalizes brand configuration documents."""

    def __init__(self):
        self.config: Optional[BrandConfig] = None

    def parse(self, yaml_text: str) -> Dict[str, Any]:
        """
        Parse a YAML document into a raw mapping.

        Raises:
            BrandConfigError: if the text is empty, not YAML, or not a mapping
        """
        if not yaml_text or not yaml_text.strip():
            raise BrandConfigError("Brand configuration is empty")
        try:
            parsed = yaml.safe_load(yaml_text)
        except yaml.YAMLError as e:
            raise BrandConfigError(f"Invalid YAML: {e}") from e
        if not isinstance(parsed, dict):
            raise BrandConfigError("Invalid YAML: expected a mapping at the top level")
        return parsed

    def validate(self, raw: Dict[str, Any]) -> BrandValidationResult:
        """
        Validate a raw configuration mapping.

        Missing brand.name, colors, required color keys or typography are
        errors; a missing logo section is only a warning.
        """
        errors: List[str] = []
        warnings: List[str] = []

        brand = raw.get("brand")
        if not isinstance(brand, dict) or not brand.get("name"):
            errors.append("brand.name is required")

        colors = raw.get("colors")
        if not colors:
            errors.append("colors section is required")
        elif not isinstance(colors, dict):
            errors.append("colors section must be a mapping")
        else:
            for key in REQUIRED_COLOR_KEYS:
                value = colors.get(key)
                if not value:
                    errors.append(f"colors.{key} is required")
                elif not is_valid_color(value):
                    errors.append(f"colors.{key} has invalid format")

        typography = raw.get("typography")
        if not typography:
            errors.append("typography section is required")
        elif not isinstance(typography, dict):
            errors.append("typography section must be a mapping")

        logo = raw.get("logo")
        if not logo:
            warnings.append("logo section is missing")
        elif not isinstance(logo, dict):
            warnings.append("logo section must be a mapping")
        else:
            placements = logo.get("placements") or []
            for placement in placements:
                if placement not in LOGO_PLACEMENTS:
                    warnings.append(f"logo.placements contains unknown placement '{placement}'")

        return BrandValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def build(self, raw: Dict[str, Any]) -> BrandConfig:
        """Build a typed config from a mapping that passed validation."""
        colors = {}
        for key, value in raw["colors"].items():
            # Extra palette keys are kept as given when they are not colors
            colors[str(key)] = normalize_color(value) if is_valid_color(value) else value

        logo = dict(raw["logo"]) if isinstance(raw.get("logo"), dict) else None
        if logo is not None:
            logo["placements"] = [
                p for p in (logo.get("placements") or []) if p in LOGO_PLACEMENTS
            ]

        try:
            return BrandConfig(
                brand=raw["brand"],
                colors=colors,
                typography=raw["typography"],
                logo=logo,
                effects=raw.get("effects") or {},
                shapes=raw.get("shapes") or {},
            )
        except ValidationError as e:
            raise BrandConfigError(f"Invalid config: {e.error_count()} field error(s)") from e

    def load(self, yaml_text: str) -> Tuple[BrandConfig, BrandValidationResult]:
        """
        Parse, validate and build a configuration in one step.

        Raises:
            BrandConfigError: if parsing fails or validation reports errors
        """
        raw = self.parse(yaml_text)
        validation = self.validate(raw)
        if not validation.valid:
            logger.warning("brand_config_rejected", errors=validation.errors)
            raise BrandConfigError("Invalid config", errors=validation.errors)

        config = self.build(raw)
        self.config = config
        logger.info(
            "brand_config_loaded",
            brand=config.brand.name,
            warnings=len(validation.warnings)
        )
        return config, validation

    def get_config(self) -> Optional[BrandConfig]:
        return self.config

    @staticmethod
    def generate_template() -> str:
        """Starter YAML document that validates without errors or warnings."""
        return BRAND_TEMPLATE


BRAND_TEMPLATE = """brand:
  name: "Your Company Name"
  tagline: "Your brand tagline"

colors:
  primary: "#FE621D"
  secondary: "#1C1C1C"
  accent: "#5DFDCB"
  background_light: "#F1F1F1"
  background_dark: "#1C1C1C"
  text_light: "#F1F1F1"
  text_dark: "#1C1C1C"

typography:
  headline_font: "Inter"
  body_font: "Inter"
  headline_sizes: [48, 36, 28, 24]
  body_sizes: [18, 16, 14]

logo:
  primary: "logo.svg"
  placements:
    - "top-left"
    - "bottom-right"

effects:
  gradients:
    - name: "brand-glow"
      type: "radial"
      colors: ["primary", "secondary"]
  shadows:
    - name: "card-shadow"
      offset: [0, 4]
      blur: 24
      color: "rgba(0,0,0,0.15)"

shapes:
  decorative:
    - "corner-accent"
    - "glow-ellipse"
  containers:
    - "card"
    - "pill"
"""


# Singleton instance
brand_config_loader = BrandConfigLoader()
