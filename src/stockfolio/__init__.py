"""Stockfolio: equity holdings tracking with provider-fallback quote resolution."""
