"""Main entry point with CLI."""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from mint_konnector.config import Config, config
from mint_konnector.errors import KonnectorError
from mint_konnector.jobs.runner import KonnectorRunner
from mint_konnector.logging_conf import setup_logging

logger = logging.getLogger(__name__)

DEV_CONFIG = "konnector-dev-config.json"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Mint Energie bills konnector")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"JSON file with 'fields' (login, password) and optional 'cozyParameters' (default: {DEV_CONFIG} if present)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logs",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Per-request timeout in seconds (default: {config.TIMEOUT})",
    )
    return parser.parse_args(argv)


def load_account(path: Optional[Path]) -> tuple[dict[str, Any], Optional[dict[str, Any]]]:
    """Read account fields from a dev config file, falling back to the environment."""
    if path is None and Path(DEV_CONFIG).exists():
        path = Path(DEV_CONFIG)

    if path is not None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        fields = data.get("fields") or {}
        if not fields.get("login") or not fields.get("password"):
            raise ValueError(f"Configuration errors: {path} must define fields.login and fields.password")
        return fields, data.get("cozyParameters")

    Config.validate()
    return Config.fields(), Config.cozy_parameters()


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.debug else None)

    try:
        fields, cozy_parameters = load_account(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    runner = KonnectorRunner(fields, cozy_parameters=cozy_parameters, timeout=args.timeout)
    try:
        asyncio.run(runner.run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)
    except KonnectorError as e:
        logger.error(f"{e.code}: {e.message}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
