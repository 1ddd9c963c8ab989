"""Command-line entry point for the CHIP-8 interpreter.

Settings come from an optional JSON configuration file; command-line flags
override whatever the file specifies.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.io import format_keymap
from pychip8.system import ConfigError, FileConfig, load_config
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.ui.console import ConsoleApp
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "--rom",
        type=Path,
        help="Path to the CHIP-8 ROM image (overrides FILE_PATH from --config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON configuration file",
    )
    parser.add_argument(
        "--scale",
        type=int,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        default=None,
        help="Launch the window in fullscreen mode",
    )
    parser.add_argument(
        "--ips",
        type=int,
        dest="instructions_per_second",
        help="Instructions executed per second (default: 700)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--wrap",
        action="store_true",
        default=None,
        dest="wrap_sprites",
        help="Wrap sprites around the screen edges instead of clipping them",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Print frames to the terminal instead of opening a window",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        help="Stop the console runner after this many steps",
    )
    parser.add_argument(
        "--show-keymap",
        action="store_true",
        default=None,
        dest="show_keymapping",
        help="Print the keypad layout before starting",
    )
    return parser


def merge_config(args: argparse.Namespace, file_config: FileConfig) -> AppConfig:
    """Combine file settings with command-line overrides."""

    def pick(name: str, default):
        value = getattr(args, name, None)
        if value is not None:
            return value
        value = getattr(file_config, name)
        return default if value is None else value

    defaults = AppConfig()
    return AppConfig(
        rom_path=args.rom if args.rom is not None else file_config.file_path,
        scale=pick("scale", defaults.scale),
        fullscreen=pick("fullscreen", defaults.fullscreen),
        instructions_per_second=pick("instructions_per_second", defaults.instructions_per_second),
        palette=pick("palette", defaults.palette),
        show_keymap=pick("show_keymapping", defaults.show_keymap),
        sound_frequency=pick("sound_frequency", defaults.sound_frequency),
        timer_hz=pick("timer_hz", defaults.timer_hz),
        wrap_sprites=pick("wrap_sprites", defaults.wrap_sprites),
        max_steps=args.max_steps,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    file_config = FileConfig()
    if args.config is not None:
        try:
            file_config = load_config(args.config)
        except ConfigError as exc:
            parser.error(str(exc))

    config = merge_config(args, file_config)
    if config.rom_path is None:
        if config.show_keymap:
            print(format_keymap())
            return 0
        parser.error("a ROM is required (--rom or FILE_PATH in --config)")
    if not config.rom_path.exists():
        parser.error(f"ROM file not found: {config.rom_path}")
    if config.scale <= 0 or config.instructions_per_second <= 0:
        parser.error("--scale and --ips must be positive")

    app = ConsoleApp(config) if args.console else Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
