"""Qt palette helpers."""
