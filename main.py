"""loganalyze — summarize a newline-delimited JSON log file."""

import logging
import sys
from argparse import ArgumentParser

from loganalyze.config import Config
from loganalyze.errors import LogAnalyzeError
from loganalyze.metrics import analyze
from loganalyze.reader import parse_file
from loganalyze.report import render_report

logger = logging.getLogger("loganalyze")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="loganalyze",
        description="Normalize an ndjson log file and print summary metrics.",
    )
    parser.add_argument(
        "-f", "--file",
        help="Path to the JSON log file (one object per line)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: $LOGANALYZE_CONFIG)",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        help="Report format (default: text, or report.format from config)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Diagnostic log level on stderr (default: WARNING)",
    )
    return parser


def setup_logging(settings: dict, level_override: str | None = None) -> None:
    """Install the stderr handler, replacing any handler installed earlier."""
    level = str(level_override or settings["level"]).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=settings["format"],
        stream=sys.stderr,
        force=True,
    )


def run(args, parser: ArgumentParser) -> int:
    """Execute read -> analyze -> render. Returns the process exit status."""
    if not args.file:
        print("Usage: loganalyze -f <log file>", file=sys.stderr)
        print("Example: loganalyze -f app.json", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    # Defaults first so Config can log while loading, then the loaded settings.
    setup_logging(Config.DEFAULTS["logging"], args.log_level)
    config = Config(args.config)
    setup_logging(config["logging"], args.log_level)

    try:
        result = parse_file(args.file, encoding=config["reader"]["encoding"])
    except LogAnalyzeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    metrics = analyze(result.entries)
    render_report(metrics, sys.stdout, output_format=args.output or config["report"]["format"])

    if result.diagnostics:
        logger.warning("Skipped %d malformed line(s) in %s", len(result.diagnostics), args.file)
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    try:
        return run(args, parser)
    except KeyboardInterrupt:
        return 0
    except BrokenPipeError:
        return 0


if __name__ == "__main__":
    sys.exit(main())
