"""
Properties Loader Module
========================

Responsibility:
- Read an optional Java-properties style file into a read-only mapping.
- Treat an absent file as an empty configuration (non-release builds).
- Skip malformed lines instead of aborting the whole load.
"""

from .properties_loader import ConfigMap, PropertiesLoader, load_properties, parse_properties

__all__ = ['ConfigMap', 'PropertiesLoader', 'load_properties', 'parse_properties']
