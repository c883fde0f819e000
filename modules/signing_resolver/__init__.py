"""
Signing Resolver Module
=======================

Responsibility:
- Resolve the four release signing credentials from a loaded ConfigMap.
- Fail fast on the first missing key, in a fixed lookup order.
"""

from .signing_resolver import (
    REQUIRED_KEYS,
    ResolutionState,
    SigningConfigResolver,
    SigningCredentials,
    SigningResolution,
    resolve_signing_config,
)

__all__ = [
    'REQUIRED_KEYS',
    'ResolutionState',
    'SigningConfigResolver',
    'SigningCredentials',
    'SigningResolution',
    'resolve_signing_config',
]
