"""Signing configuration components."""
