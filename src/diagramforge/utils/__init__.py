"""Utility helpers for diagramforge."""
