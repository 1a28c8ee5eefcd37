"""Utility helpers shared across the wayfinding package."""
