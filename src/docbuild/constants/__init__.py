"""Shared constants for docbuild."""
