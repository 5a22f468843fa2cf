"""Utility helpers for persistence, validation and logging."""
