"""
Pytest configuration and fixtures for backend tests
"""
import pytest
from fastapi.testclient import TestClient

from asset_factory.main import app
from asset_factory.config.brand_schema import brand_config_loader
from asset_factory.models import Node, NodeKind
from asset_factory.services.asset_engine import asset_engine
from asset_factory.services.audit_engine import audit_engine
from asset_factory.services.theme_engine import theme_engine


@pytest.fixture
def client():
    """Create a test client for the FastAPI application"""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_brand_config():
    """Keep the shared services on default brand settings between tests"""
    yield
    brand_config_loader.config = None
    for service in (theme_engine, audit_engine, asset_engine):
        service.set_brand_config(None)


def build_messy_tree():
    """A designer-named document that has not been normalized yet"""
    return Node(
        kind=NodeKind.FRAME,
        name="Hero",
        width=1200,
        height=675,
        children=[
            Node(kind=NodeKind.FRAME, name="Text Group", children=[
                Node(kind=NodeKind.TEXT, name="Main Headline", characters="Launch Day", font_family="Inter"),
                Node(kind=NodeKind.TEXT, name="Sub Heading", characters="Everything is new", font_family="Inter"),
                Node(kind=NodeKind.TEXT, name="Body copy", characters="Details inside.", font_family="Inter"),
                Node(kind=NodeKind.TEXT, name="Button Label", characters="Get started", font_family="Inter"),
            ]),
            Node(kind=NodeKind.FRAME, name="Brand Area", children=[
                Node(kind=NodeKind.VECTOR, name="Logo Mark", width=120, height=40),
            ]),
            Node(kind=NodeKind.RECTANGLE, name="Extra"),
            Node(kind=NodeKind.FRAME, name="Decor", children=[
                Node(kind=NodeKind.ELLIPSE, name="Glow Blur", width=400, height=400),
            ]),
            Node(kind=NodeKind.FRAME, name="Background"),
        ]
    )


@pytest.fixture
def messy_tree():
    """Create an un-normalized document tree"""
    return build_messy_tree()


@pytest.fixture
def sample_content():
    """Raw copy for a launch asset"""
    return [
        {"text": "NEW"},
        {"text": "Launch Day Is Here"},
        {"text": "Everything you need to ship faster."},
        {"text": "Get Started Today"},
    ]
