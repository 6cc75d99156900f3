"""Shared constants and configuration helpers."""
