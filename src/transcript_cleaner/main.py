"""Entry point for the transcript-cleaner service."""

import argparse
import sys

from ddtrace import patch_all

from transcript_cleaner.config import load_config
from transcript_cleaner.dependencies import build_handler
from transcript_cleaner.domain import ProgressUpdate
from transcript_cleaner.logging import setup_logging

logger = setup_logging()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="transcript-cleaner",
        description="Clean or summarize a transcribed medical session.",
    )
    parser.add_argument("command", choices=["clean", "summarize"])
    parser.add_argument("session_id", help="Identifier of the transcript session")
    return parser.parse_args(argv)


class _ProgressPrinter:
    """Writes only the newly generated suffix of each streamed snapshot."""

    def __init__(self, stream=sys.stderr):
        self._stream = stream
        self._printed = ""

    def __call__(self, update: ProgressUpdate) -> None:
        if update.final:
            self._stream.write("\n")
            return
        if update.text.startswith(self._printed):
            self._stream.write(update.text[len(self._printed):])
        self._stream.flush()
        self._printed = update.text


def main(argv: list[str] | None = None) -> int:
    """Runs one clean or summarize request and prints the result."""
    # stdout carries only the result
    setup_logging(stream=sys.stderr)
    patch_all()
    args = _parse_args(argv)
    logger.info(
        "Starting transcript-cleaner",
        extra={"command": args.command, "session_id": args.session_id},
    )

    handler = build_handler(load_config())
    updates = (
        handler.iter_clean_session(args.session_id)
        if args.command == "clean"
        else handler.iter_summarize_session(args.session_id)
    )

    printer = _ProgressPrinter()
    result = ""
    try:
        for update in updates:
            printer(update)
            result = update.text
    except Exception:
        logger.exception("Request failed", extra={"session_id": args.session_id})
        return 1

    sys.stdout.write(result + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
