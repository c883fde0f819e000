"""
Utility package setup.

Shared exceptions, constants and error-handling helpers.
"""
