"""Utility helpers -- structured logging."""
