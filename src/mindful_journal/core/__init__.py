"""Application-wide paths."""

from .config import APP_AUTHOR, APP_NAME, DATA_DIR, ensure_data_dir

__all__ = ["APP_AUTHOR", "APP_NAME", "DATA_DIR", "ensure_data_dir"]
