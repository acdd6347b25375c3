"""Shared helpers for forumsync."""
