"""Tests for the command line parser."""

import pytest

from mindful_journal.cli import build_parser


def test_gui_command():
    assert build_parser().parse_args(["gui"]).command == "gui"


def test_api_defaults():
    args = build_parser().parse_args(["api"])

    assert (args.command, args.host, args.port) == ("api", "127.0.0.1", 8000)


def test_api_overrides():
    args = build_parser().parse_args(["api", "--host", "0.0.0.0", "--port", "9001"])

    assert (args.host, args.port) == ("0.0.0.0", 9001)


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
