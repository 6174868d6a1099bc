#!/usr/bin/env python3
"""
Offline editor for attachment tuner configuration files.

Features:
- show <attachment>: print the configured multipliers of one attachment
- tune <attachment> <property> <value>: set hipcone | sway | swayspeed and save
- list: print every configured attachment
- defaults: rewrite the file with the built-in rule set
- --config: JSON file, or YAML when the path ends in .yaml/.yml
  (default: the file shipped with the mod)

Edits go through the same command handler the in-game chat commands use, so
validation and messages are identical.  No weapon is retuned from here; the
running mod picks changes up on its next config reload.
"""

import argparse
import sys
from pathlib import Path

from modules.weapon_tuning import TuneCommandHandler, TunerConfigStore
from modules.weapon_tuning.commands import format_multiplier
from mods.attachment_tuner import DEFAULT_STORAGE


class HelpOnErrorArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        sys.stderr.write(f"Error: {message}\n\n")
        self.print_help(sys.stderr)
        raise SystemExit(2)


def build_parser() -> argparse.ArgumentParser:
    parser = HelpOnErrorArgumentParser(
        description="Inspect and edit attachment tuner multipliers.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_STORAGE),
        help="Configuration file to edit (JSON, or YAML for .yaml/.yml).",
    )
    sub = parser.add_subparsers(dest="action", required=True)

    show = sub.add_parser("show", help="Show the multipliers of one attachment.")
    show.add_argument("attachment")

    tune = sub.add_parser("tune", help="Set one multiplier of an attachment.")
    tune.add_argument("attachment")
    tune.add_argument("property", help="hipcone | sway | swayspeed")
    tune.add_argument("value")

    sub.add_parser("list", help="List every configured attachment.")
    sub.add_parser("defaults", help="Rewrite the file with the built-in defaults.")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    store = TunerConfigStore(Path(args.config).expanduser())
    if args.action == "defaults":
        store.reset()
        print(f"Wrote default configuration to: {store.path}")
        return 0

    rules = store.load_or_default()
    rules.bind_store(store)
    handler = TuneCommandHandler(rules)

    if args.action == "list":
        for mod_id, rule in rules.entries():
            print(handler.describe(mod_id, rule))
        bounds = rules.clamp_bounds().to_payload()
        print("Clamp bounds: " + ", ".join(f"{key}={format_multiplier(value)}" for key, value in sorted(bounds.items())))
        return 0

    if args.action == "show":
        result = handler.showattach(None, [args.attachment])
    else:
        result = handler.tuneattach(None, [args.attachment, args.property, args.value])

    stream = sys.stdout if result.ok else sys.stderr
    print(result.message, file=stream)
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
