"""Packaged resources (framework configuration defaults)."""
