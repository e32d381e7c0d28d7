from __future__ import annotations

from typing import Tuple

from PyQt6.QtGui import QColor, QPalette
from PyQt6.QtWidgets import QApplication

from ...config import AppPalette

Role = QPalette.ColorRole

# Qt colour role -> AppPalette field. Paper-white inputs on a warm stone window,
# indigo for anything actionable or selected.
PALETTE_ROLES: Tuple[Tuple[QPalette.ColorRole, str], ...] = (
    (Role.Window, "background_primary"),
    (Role.WindowText, "text_primary"),
    (Role.Base, "surface"),
    (Role.AlternateBase, "background_secondary"),
    (Role.Text, "text_primary"),
    (Role.PlaceholderText, "text_muted"),
    (Role.Button, "accent_primary"),
    (Role.ButtonText, "surface"),
    (Role.Highlight, "accent_primary"),
    (Role.HighlightedText, "surface"),
    (Role.Mid, "border_subtle"),
)


def build_qt_palette(palette: AppPalette) -> QPalette:
    qt_palette = QPalette()
    for role, field_name in PALETTE_ROLES:
        qt_palette.setColor(role, QColor(getattr(palette, field_name)))
    return qt_palette


def apply_palette(app: QApplication, palette: AppPalette) -> None:
    app.setPalette(build_qt_palette(palette))
    app.setStyleSheet(palette.as_stylesheet())
