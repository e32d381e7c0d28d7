"""Tests for the palette and its Qt role mapping."""

from dataclasses import fields

import pytest

from mindful_journal.config import AppPalette

theme = pytest.importorskip("mindful_journal.ui.styles.theme", exc_type=ImportError)


def test_every_mapped_field_exists():
    names = {field.name for field in fields(AppPalette)}

    assert {field_name for _role, field_name in theme.PALETTE_ROLES} <= names


def test_roles_are_mapped_once():
    roles = [role for role, _field_name in theme.PALETTE_ROLES]

    assert len(roles) == len(set(roles))


def test_stylesheet_uses_palette_colours():
    palette = AppPalette(accent_primary="#123456")

    assert "#123456" in palette.as_stylesheet()
