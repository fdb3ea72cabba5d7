"""
Services package initialization.
"""
from asset_factory.services.text_analyzer import text_analyzer
from asset_factory.services.layer_manager import layer_manager
from asset_factory.services.theme_engine import theme_engine
from asset_factory.services.audit_engine import audit_engine
from asset_factory.services.asset_engine import asset_engine
from asset_factory.services.feedback_system import feedback_system

__all__ = [
    "text_analyzer",
    "layer_manager",
    "theme_engine",
    "audit_engine",
    "asset_engine",
    "feedback_system"
]
