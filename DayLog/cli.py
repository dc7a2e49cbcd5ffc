# DayLog/cli.py

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from DayLog.config import Settings
from DayLog.formatters import SummaryError
from DayLog.parsing.line_parser import format_log
from DayLog.summary.daily import summarize_note

logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
    level=logging.INFO,
)
log = logging.getLogger("DayLog.cli")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daylog",
        description="DayLog: turn a freeform day log into a Time | Activity | Notes table"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for all DayLog modules."
    )
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- Table Subcommand ---
    parser_table = subparsers.add_parser("table", help="Print the locally formatted table for a log file.")
    parser_table.add_argument("file", nargs="?", type=Path, help="Log file to read (default: stdin).")
    def handle_table(args_ns, current_settings: Settings) -> int:
        text = args_ns.file.read_text(encoding="utf-8") if args_ns.file else sys.stdin.read()
        print(format_log(text))
        return 0
    parser_table.set_defaults(func=handle_table)

    # --- Summarize Subcommand ---
    parser_summarize = subparsers.add_parser("summarize", help="Append a summary table to a Markdown note.")
    parser_summarize.add_argument("note", type=Path, help="Markdown note to summarize.")
    parser_summarize.add_argument("--provider", choices=["local", "remote"], help="Override the configured provider.")
    parser_summarize.add_argument("--model", help="Gemini model to use (e.g., gemini-1.5-flash, gemini-1.5-pro).")
    parser_summarize.add_argument("--no-header", action="store_true", help="Do not insert the summary header before the table.")
    parser_summarize.add_argument("--dry-run", action="store_true", help="Print the table instead of modifying the note.")
    def handle_summarize(args_ns, current_settings: Settings) -> int:
        if args_ns.provider: current_settings.provider = args_ns.provider
        if args_ns.model: current_settings.model_name = args_ns.model
        if args_ns.no_header: current_settings.add_header = False
        try:
            summary = summarize_note(args_ns.note, current_settings, dry_run=args_ns.dry_run)
        except (SummaryError, FileNotFoundError) as e:
            log.error(f"Summary failed for {args_ns.note}: {e}", exc_info=args_ns.debug)
            print(f"Summary failed: {e}", file=sys.stderr)
            return 1
        if args_ns.dry_run:
            print(summary)
        else:
            print("Daily summary inserted")
        return 0
    parser_summarize.set_defaults(func=handle_summarize)

    return parser


def main(argv=None) -> int:
    settings = Settings()
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger("DayLog").setLevel(logging.DEBUG)
        log.debug("Debug logging enabled.")

    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
