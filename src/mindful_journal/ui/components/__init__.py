"""Reusable widgets for the main window."""
