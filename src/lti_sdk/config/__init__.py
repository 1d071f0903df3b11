"""
Configuration management for LTI Python SDK

This module provides provider configuration loading from JSON text, JSON
files and environment variables.
"""

from .provider_config import (
    ProviderConfig,
    LOG_LEVELS,
    ENV_PREFIX,
)

__all__ = [
    'ProviderConfig',
    'LOG_LEVELS',
    'ENV_PREFIX',
]
