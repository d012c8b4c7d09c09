"""Logging setup, decision log and replay recording."""
