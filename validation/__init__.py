"""
Validation module for CorrespondingReference.

Provides plugin configuration validation.
"""

from validation.config import CorrespondingReferenceConfig, validate_config

__all__ = [
    'CorrespondingReferenceConfig',
    'validate_config',
]
