"""
Configuration Manager Module
============================

Responsibility:
- Loading and validation of the tool's optional JSON settings file.
- Enforcement of schema constraints and logical rules.
- Merging user settings over built-in defaults.
"""

from .config_manager import ConfigurationManager

__all__ = ['ConfigurationManager']
