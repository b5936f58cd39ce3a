from __future__ import annotations

import argparse
import logging

from roadrush.ui.cli import commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roadrush", description="ROADRUSH arcade dodger")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common_parent = argparse.ArgumentParser(add_help=False)
    common_parent.add_argument("--verbose", action="store_true", help="Enable debug logging")
    common_parent.add_argument("--seed", type=int, default=None)
    common_parent.add_argument("--max-speed", type=float, default=None, help="Cap the scroll speed")

    sub = subparsers.add_parser("play", parents=[common_parent], help="Open the game window")
    sub.add_argument("--keys", action="store_true", help="Disable touch-follow; pointer halves act as keys")
    sub.add_argument("--width", type=int, default=None)
    sub.add_argument("--height", type=int, default=None)
    sub.set_defaults(func=commands.cmd_play)

    sub = subparsers.add_parser("simulate", parents=[common_parent], help="Run headless autopilot simulations")
    sub.add_argument("--sims", type=int, default=None)
    sub.add_argument("--max-frames", type=int, default=None)
    sub.add_argument("--workers", type=int, default=None, help="0 runs in-process")
    sub.set_defaults(func=commands.cmd_simulate)

    sub = subparsers.add_parser("report", parents=[common_parent], help="Print the saved simulation summary")
    sub.set_defaults(func=commands.cmd_report)

    sub = subparsers.add_parser("doctor", parents=[common_parent], help="Check environment/dependencies")
    sub.set_defaults(func=commands.cmd_doctor)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
