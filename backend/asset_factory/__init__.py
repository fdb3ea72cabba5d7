"""
Brand Asset Factory - Brand-consistent marketing asset generation.
"""
__version__ = "1.0.0"
