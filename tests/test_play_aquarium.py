"""
Tests for the window entry point's command line.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from aquarium import play_aquarium
from aquarium.play_aquarium import build_parser, main


class TestCommandLine:
    """Test argument parsing without opening a window."""

    def test_entry_point_inside_package(self):
        assert play_aquarium.__name__ == "aquarium.play_aquarium"
        assert callable(main)

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.profile is None
        assert args.seed is None
        assert args.crt
        assert args.scale == 2
        assert args.fps == 60

    def test_flags(self):
        args = build_parser().parse_args(["--profile", "drift", "--seed", "7", "--no-crt"])

        assert args.profile == "drift"
        assert args.seed == 7
        assert not args.crt

    def test_unknown_profile_exits_with_error(self, capsys):
        assert main(["--profile", "no-such-tank"]) == 1
        assert "Error" in capsys.readouterr().out
