"""Shared helpers (logging) for the CorrespondingReference plugin."""
