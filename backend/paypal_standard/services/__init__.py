"""Encoding and rendering services."""
