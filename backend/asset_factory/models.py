"""
Pydantic models for the Brand Asset Factory API.
"""
from datetime import datetime, timezone
from typing import Optional, List, Literal, Union, Dict, Tuple, Annotated
from pydantic import BaseModel, Field, field_validator, model_validator
from enum import Enum

from asset_factory.utils import generate_asset_id


# ============================================================================
# TEXT
# ============================================================================

class Role(str, Enum):
    """Semantic role of a text fragment."""
    TAG = "tag"
    HEADLINE = "headline"
    SUBHEAD = "subhead"
    BODY = "body"
    CTA = "cta"


class TextInput(BaseModel):
    """Raw text with an optional explicit role."""
    text: str
    role: Optional[Role] = None


class ClassifiedText(BaseModel):
    """A text fragment after role classification."""
    text: str
    role: Role
    word_count: int = Field(ge=0)
    char_count: int = Field(ge=0)
    has_action_cue: bool = False
    ends_with_terminal_punctuation: bool = False
    confidence: float = Field(ge=0, le=1)


# ============================================================================
# DOCUMENT TREE
# ============================================================================

class NodeKind(str, Enum):
    """Kinds of document tree nodes."""
    FRAME = "FRAME"
    GROUP = "GROUP"
    TEXT = "TEXT"
    ELLIPSE = "ELLIPSE"
    RECTANGLE = "RECTANGLE"
    VECTOR = "VECTOR"


CONTAINER_KINDS = frozenset({NodeKind.FRAME, NodeKind.GROUP})
TEXT_KINDS = frozenset({NodeKind.TEXT})
FILLABLE_KINDS = frozenset(set(NodeKind) - {NodeKind.GROUP})


class RGB(BaseModel):
    """Color with channels in the 0-1 range."""
    r: float = Field(ge=0, le=1)
    g: float = Field(ge=0, le=1)
    b: float = Field(ge=0, le=1)


class RGBA(RGB):
    a: float = Field(default=1.0, ge=0, le=1)


class ColorStop(BaseModel):
    position: float = Field(ge=0, le=1)
    color: RGBA


class SolidPaint(BaseModel):
    type: Literal["SOLID"] = "SOLID"
    color: RGB


class GradientPaint(BaseModel):
    type: Literal["GRADIENT_LINEAR", "GRADIENT_RADIAL"] = "GRADIENT_LINEAR"
    gradient_stops: List[ColorStop]
    gradient_transform: Tuple[Tuple[float, float, float], Tuple[float, float, float]] = (
        (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)
    )


Paint = Annotated[Union[SolidPaint, GradientPaint], Field(discriminator="type")]


class Node(BaseModel):
    """
    Element of a generated document.

    Containers (FRAME, GROUP) own an ordered list of children; every other
    kind is a leaf. Components branch on the capability properties below
    rather than on ``kind`` directly.
    """
    id: str = Field(default_factory=generate_asset_id)
    kind: NodeKind
    name: str = ""
    children: List["Node"] = []
    fills: List[Paint] = Field(default_factory=list)
    visible: bool = True
    opacity: float = Field(default=1.0, ge=0, le=1)
    x: float = 0
    y: float = 0
    width: float = Field(default=0, ge=0)
    height: float = Field(default=0, ge=0)
    # Text-only properties; font_family None means mixed fonts
    characters: Optional[str] = None
    font_family: Optional[str] = None
    font_style: Optional[str] = None
    font_size: Optional[float] = None

    @model_validator(mode="after")
    def leaves_have_no_children(self) -> "Node":
        if self.children and not self.is_container:
            raise ValueError(f"{self.kind.value} nodes cannot have children")
        return self

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @property
    def is_text(self) -> bool:
        return self.kind in TEXT_KINDS

    @property
    def is_fillable(self) -> bool:
        return self.kind in FILLABLE_KINDS

    def walk(self):
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


Node.model_rebuild()


class LayerValidationResult(BaseModel):
    """Result of validating a document's layer structure."""
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    suggestions: List[str] = []


# ============================================================================
# THEMES
# ============================================================================

class ThemeDefinition(BaseModel):
    """A named bundle of palette keys and a glow flag."""
    id: str
    name: str
    description: str = ""
    background: str
    text: str
    accent: str
    use_glow: bool = False


# ============================================================================
# AUDIT
# ============================================================================

class CheckSeverity(str, Enum):
    """Severity levels for audit checks."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class AuditCheck(BaseModel):
    """A single compliance check outcome."""
    name: str
    passed: bool
    message: Optional[str] = None
    severity: CheckSeverity


class AuditResult(BaseModel):
    """Aggregated compliance audit of one document."""
    node_id: str
    node_name: str
    passed: bool
    score: int = Field(ge=0, le=100)
    checks: List[AuditCheck] = []
    warnings: List[str] = []
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# FEEDBACK
# ============================================================================

class IssueCategory(str, Enum):
    COLOR = "color"
    TYPOGRAPHY = "typography"
    LAYOUT = "layout"
    LOGO = "logo"
    OTHER = "other"


class IssueSeverity(str, Enum):
    """Severity of an issue raised by a human reviewer."""
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class FeedbackOutcome(str, Enum):
    APPROVED = "approved"
    REVISED = "revised"
    REJECTED = "rejected"


class FeedbackIssue(BaseModel):
    category: IssueCategory
    severity: IssueSeverity
    description: str


class FeedbackEntry(BaseModel):
    """One review of a generated asset. Entries are never edited."""
    asset_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reviewer: str = "Anonymous"
    overall_rating: float = Field(ge=1, le=5)
    brand_alignment: Optional[float] = Field(default=None, ge=1, le=5)
    visual_appeal: Optional[float] = Field(default=None, ge=1, le=5)
    issues: List[FeedbackIssue] = []
    outcome: FeedbackOutcome
    notes: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class IssueCount(BaseModel):
    issue: str
    count: int


class FeedbackSummary(BaseModel):
    """Aggregate feedback statistics over a rolling window."""
    total_assets: int = 0
    approved_first_try: int = 0
    needed_revision: int = 0
    rejected: int = 0
    approval_rate: float = 0.0
    average_rating: float = 0.0
    common_issues: List[IssueCount] = []
    period_start: datetime
    period_end: datetime


# ============================================================================
# API REQUESTS / RESPONSES
# ============================================================================

class AnalyzeRequest(BaseModel):
    """Request for classifying text fragments."""
    content: List[TextInput]


class AnalyzeResponse(BaseModel):
    items: List[ClassifiedText]


class AssetOptions(BaseModel):
    logo_placement: Optional[Literal[
        "top-left", "top-right", "bottom-left", "bottom-right", "center"
    ]] = None


class GenerateAssetRequest(BaseModel):
    """Request for generating a single asset."""
    asset_type: str
    content: List[TextInput]
    theme: Optional[str] = None
    options: AssetOptions = Field(default_factory=AssetOptions)


class GenerateAssetResponse(BaseModel):
    node_id: str
    name: str
    dimensions: Dict[str, int]
    document: Node
    audit_result: AuditResult


class BatchGenerateRequest(BaseModel):
    """Request for generating one asset per asset type."""
    asset_types: List[str] = []
    preset: Optional[str] = None
    content: List[TextInput]
    theme: Optional[str] = None


class BatchGenerateResult(BaseModel):
    asset_type: str
    success: bool
    node_id: Optional[str] = None
    score: Optional[int] = None
    error: Optional[str] = None


class BatchGenerateResponse(BaseModel):
    results: List[BatchGenerateResult]


class AuditRequest(BaseModel):
    """Audit posted documents and/or previously generated ones by id."""
    documents: List[Node] = []
    node_ids: List[str] = []


class AuditResponse(BaseModel):
    results: List[AuditResult]
    missing: List[str] = []


class ApplyThemeRequest(BaseModel):
    document: Node
    theme: str


class BrandConfigRequest(BaseModel):
    config_yaml: str


class SubmitFeedbackRequest(BaseModel):
    """Feedback as submitted by a reviewer."""
    asset_id: str
    rating: int = Field(ge=1, le=5)
    outcome: FeedbackOutcome
    issues: List[FeedbackIssue] = []
    notes: Optional[str] = None
    reviewer: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    services: dict = {}
