# File: multilevel_parking/main.py
"""
Main application entry point for the Multi-Floor Parking Lot
Reads commands from stdin (or --input) and writes results to stdout (or --output)
"""

from contextlib import ExitStack
from typing import List, Optional
import argparse
import json
import logging
import os
import sys

from pydantic import ValidationError

from .application.settings import ParkingSettings
from .application.parking_service import ParkingServiceFactory, LotNotCreatedError
from .application.commands import CommandProcessor
from .presentation.console import ConsoleShell


def setup_logging(settings: ParkingSettings) -> logging.Logger:
    """Setup application logging configuration; stdout stays reserved for command output"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(settings.log_dir, settings.log_file)))

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
    return logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parking-lot",
        description="Multi-floor parking lot simulator driven by text commands"
    )
    parser.add_argument("--input", "-i", help="Command file (default: stdin)")
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", "-c", help="JSON settings file")
    parser.add_argument("--log-level", help="Override the configured log level")
    parser.add_argument(
        "--status", action="store_true",
        help="Print a JSON occupancy summary after the last command"
    )
    return parser


def load_settings(args: argparse.Namespace) -> ParkingSettings:
    settings = ParkingSettings.from_file(args.config) if args.config else ParkingSettings()
    if args.log_level:
        settings = ParkingSettings.from_dict({**settings.model_dump(), "log_level": args.log_level})
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as e:
        parser.error(f"invalid settings: {e}")

    logger = setup_logging(settings)
    logger.info("Starting parking lot session")

    service = ParkingServiceFactory.create_service(settings)

    with ExitStack() as stack:
        input_stream = stack.enter_context(open(args.input, "r", encoding="utf-8")) if args.input else sys.stdin
        output_stream = stack.enter_context(open(args.output, "w", encoding="utf-8")) if args.output else sys.stdout

        shell = ConsoleShell(CommandProcessor(service), output=output_stream)
        processed = shell.run(input_stream)
        logger.info(f"Processed {processed} commands")

        if args.status:
            try:
                output_stream.write(json.dumps(service.get_status().to_dict(), indent=2) + "\n")
            except LotNotCreatedError:
                logger.warning("No parking lot was created; no status to report")

    return 0


if __name__ == "__main__":
    sys.exit(main())
