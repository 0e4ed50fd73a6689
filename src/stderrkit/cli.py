"""Demo CLI for stderrkit.

Renders each feature from the command line, which makes it handy for
eyeballing a terminal's glyph support or piping output into a bug
report. Uses a two-pass argument parser:
  1. First pass: extract global flags (--quiet, --trace, --no-color, ...)
  2. Second pass: dispatch to the subcommand

Global flags can appear before OR after the subcommand:
  stderrkit --trace trace        # works
  stderrkit trace --trace        # also works

Flags are layered over the *_MODE environment variables; a flag given
on the command line always turns its category on.
"""

import argparse
import sys

from stderrkit._version import BASE_VERSION, VERSION
from stderrkit.config import resolve_config
from stderrkit.errors import NonInteractiveError
from stderrkit.lib.layout_lib import BorderStyle
from stderrkit.lib.log_lib import init_logger


# ---------------------------------------------------------------------------
# Global flags (can precede or follow the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--quiet": {"aliases": ["-Q"], "action": "store_true", "default": False,
                "help": "Suppress everything except errors"},
    "--debug": {"action": "store_true", "default": False,
                "help": "Show debug messages"},
    "--dev": {"action": "store_true", "default": False,
              "help": "Show devlog messages"},
    "--trace": {"action": "store_true", "default": False,
                "help": "Show trace output"},
    "--silly": {"action": "store_true", "default": False,
                "help": "Show magic/silly messages"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable colored output"},
    "--width": {"type": int, "metavar": "COLS", "default": None,
                "help": "Render for this many columns instead of the terminal width"},
}

STYLE_CHOICES = [s.value for s in BorderStyle]


def _add_global_flags(parser):
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_flags(global_parser)
    return global_parser.parse_known_args(argv)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------
def _run_levels(log, args):
    if args.label:
        log.set_label(args.label)
    log.error("error: always shown")
    log.warn("warn: something looks off")
    log.info("info: general progress")
    log.okay("okay: step succeeded")
    log.note("note: side remark")
    log.debug("debug: shown with --debug")
    log.devlog("devlog: shown with --dev")
    log.trace("trace: shown with --trace")
    log.magic("magic: shown with --silly")
    log.silly("silly: shown with --silly")
    return 0


def _run_banner(log, args):
    log.banner(args.text, args.fill)
    return 0


def _run_box(log, args):
    log.boxed(args.text.replace("\\n", "\n"), BorderStyle(args.style))
    return 0


def _run_flags(log, args):
    bitmask = int(args.bitmask, 0)
    log.print_flag_table(bitmask, args.labels, BorderStyle(args.style), bits=args.bits)
    return 0


def _run_table(log, args):
    log.simple_table([row.split(args.sep) for row in args.rows])
    return 0


def _run_columns(log, args):
    log.columns(args.items, args.cols)
    return 0


def _run_trace(log, args):
    log.set_trace(True)
    log.trace_fn("parse_config", "starting configuration parsing")
    log.trace_fn("parse_config", "reading config file")
    with log.trace_scope("validate_url") as scope:
        scope.step("checking connection")
        scope.step_debug("resolved", {"host": "localhost", "port": 5432})
    log.trace_fn("parse_config", "configuration loaded")
    log.trace_add("added 3 keys")
    log.trace_sub("removed 1 key")
    log.trace_found("found override file")
    log.trace_item("item: DATABASE_URL")
    log.trace_done("done")
    return 0


def _run_context(log, args):
    for context in args.contexts:
        log.set_context(context)
        log.info(f"working in {context}")
    return 0


def _run_confirm(log, args):
    builder = log.confirm_builder(args.prompt).boxed(args.boxed).style(BorderStyle(args.style))
    try:
        answer = builder.ask()
    except NonInteractiveError as e:
        log.error(str(e))
        return 3
    if answer is None:
        return 2
    return 0 if answer else 1


def _run_grid(log, args):
    log.print_color_grid(args.cols)
    return 0


def _register_commands(subparsers):
    """Add every subcommand; each sets ``func`` to its runner."""
    p = subparsers.add_parser("levels", help="Print one message per log level")
    p.add_argument("--label", help="Label shown before each glyph")
    p.set_defaults(func=_run_levels)

    p = subparsers.add_parser("banner", help="Print a centred banner")
    p.add_argument("text")
    p.add_argument("--fill", default="=", help="Fill character (default: =)")
    p.set_defaults(func=_run_banner)

    p = subparsers.add_parser("box", help="Draw text in a box (\\n splits lines)")
    p.add_argument("text")
    p.add_argument("--style", choices=STYLE_CHOICES, default="light")
    p.set_defaults(func=_run_box)

    p = subparsers.add_parser("flags", help="Show a bitmask as a bit table")
    p.add_argument("bitmask", help="Integer, any base prefix (0b101, 0x1f, 42)")
    p.add_argument("labels", nargs="*", help="Label per bit, LSB first")
    p.add_argument("--style", choices=STYLE_CHOICES, default="light")
    p.add_argument("--bits", type=int, default=None,
                   help="Number of bit columns (default: number of labels)")
    p.set_defaults(func=_run_flags)

    p = subparsers.add_parser("table", help="Print rows as an aligned table")
    p.add_argument("rows", nargs="+", help="Rows, cells separated by --sep")
    p.add_argument("--sep", default=",", help="Cell separator (default: ,)")
    p.set_defaults(func=_run_table)

    p = subparsers.add_parser("columns", help="Flow items into columns")
    p.add_argument("items", nargs="+")
    p.add_argument("--cols", "-n", type=int, default=3)
    p.set_defaults(func=_run_columns)

    p = subparsers.add_parser("trace", help="Show a sample trace tree")
    p.set_defaults(func=_run_trace)

    p = subparsers.add_parser("context", help="Set contexts in order (repeats stay silent)")
    p.add_argument("contexts", nargs="+")
    p.set_defaults(func=_run_context)

    p = subparsers.add_parser(
        "confirm", help="Ask y/n/q; exit 0=yes 1=no 2=quit 3=not a terminal")
    p.add_argument("prompt")
    p.add_argument("--boxed", action="store_true", default=False)
    p.add_argument("--style", choices=STYLE_CHOICES, default="light")
    p.set_defaults(func=_run_confirm)

    p = subparsers.add_parser("grid", help="Show the 256-colour palette")
    p.add_argument("--cols", type=int, default=16)
    p.set_defaults(func=_run_grid)


def _build_parser():
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="stderrkit",
        description="stderrkit — terminal output formatting demo",
        epilog=(
            "Global flags (--quiet, --trace, --no-color, ...) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"stderrkit {BASE_VERSION} ({VERSION})",
    )
    _add_global_flags(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )
    _register_commands(subparsers)
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for the stderrkit CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    # Pass 2: parse subcommand args
    parser = _build_parser()
    if not remaining:
        parser.print_help()
        return 0
    args = parser.parse_args(remaining)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    log = init_logger(
        resolve_config(global_args),
        width=global_args.width,
        color=False if global_args.no_color else None,
    )

    try:
        return args.func(log, args) or 0
    except KeyboardInterrupt:
        log.newline()
        log.warn("Interrupted.")
        return 130
    except ValueError as e:
        log.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
