#!/usr/bin/env python
"""
CLI entry point for the SMS Reply Pipeline.

Run an operator reply through classification, time resolution, and reply
composition, and print what would be sent back:
    python pipelines/sms_reply/cli.py "BOOK TUE 2PM" --name "John Smith"

Options via environment variables:
    SMS_REPLY_TIMEZONE       IANA timezone used to resolve times
    SMS_REPLY_CONFIG         Path to a YAML settings file

Command line arguments:
    message                  Reply text (quote it, or pass several words)
    --now                    Reference instant, ISO 8601 (default: current time)
    --tz                     IANA timezone (overrides settings)
    --name, -n               Customer name for confirmations (default: Lead)
    --config, -c             YAML settings file (default: config/sms_reply.yaml)
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for direct script execution
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import yaml
from dateutil import parser as date_parser
from dotenv import load_dotenv

from core.logger import get_logger
from pipelines.sms_reply.config import DEFAULT_CUSTOMER_NAME, load_settings
from pipelines.sms_reply.pipeline import PIPELINE_NAME, build_pipeline

logger = get_logger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SMS Reply Pipeline - interpret operator SMS replies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli.py "4 TUE 2PM" --name "John Smith"
  python cli.py SNOOZE 3H --now 2024-12-20T10:00:00
  python cli.py "BOOK TOMORROW 9AM" --tz America/Chicago
        """,
    )
    parser.add_argument("message", nargs="+", help="Reply text")
    parser.add_argument(
        "--now",
        default=None,
        help="Reference instant in ISO 8601 (default: current time)",
    )
    parser.add_argument(
        "--tz",
        default=None,
        help="IANA timezone (default: settings / SMS_REPLY_TIMEZONE)",
    )
    parser.add_argument(
        "-n", "--name",
        default=DEFAULT_CUSTOMER_NAME,
        help=f"Customer name for confirmations (default: {DEFAULT_CUSTOMER_NAME})",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="YAML settings file (default: config/sms_reply.yaml)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main entry point.

    Returns:
        0 when the reply resolved to an action other than clarify/ignore,
        1 when the operator needs to be re-prompted or nothing matched,
        2 on invalid arguments or settings.
    """
    load_dotenv()
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
        # The CLI is the one place allowed to read the clock
        now = date_parser.isoparse(args.now) if args.now else datetime.now()
    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error(f"✗ {e}")
        return 2

    message = " ".join(args.message)
    context = {
        "body": message,
        "now": now,
        "customer_name": args.name,
        "timezone": args.tz,
    }

    logger.info(f"Running {PIPELINE_NAME} for {message!r} at {now.isoformat()}")

    try:
        result = build_pipeline(settings=settings).run(context)
    except RuntimeError as e:
        logger.error(f"✗ Pipeline failed: {e}")
        return 2

    command = result["command"]
    resolution = result["resolution"] or {}
    logger.info(f"  Command: {command['name']} ({command['kind']})")
    if resolution.get("date_time"):
        logger.info(f"  Resolved: {resolution['date_time'].isoformat()}")
    if resolution.get("until"):
        logger.info(f"  Snooze until: {resolution['until'].isoformat()}")
    logger.info(f"  Action: {result['action']}")

    if result["reply"] is not None:
        print(result["reply"])

    return 1 if result["action"] in ("clarify", "ignore") else 0


if __name__ == "__main__":
    sys.exit(main())
