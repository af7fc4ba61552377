"""Shared helpers that are not part of the binding engine."""
