"""Shared helpers for the frame monitor."""
