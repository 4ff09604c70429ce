"""
Configuration package for RPP Copilot.

Usage:
    from rpp_copilot.config import settings as config
    config.GOOGLE_API_KEY, config.LLM_MODEL, ...
"""
