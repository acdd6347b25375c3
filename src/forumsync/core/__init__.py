"""Core synchronization logic for forumsync."""
