"""
Configuration package: static defaults and the brand configuration loader.
"""
