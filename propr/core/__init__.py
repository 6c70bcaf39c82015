"""Core scoring logic."""
