"""
ToggleMaster CLI entry point.

Usage:
    python -m togglemaster                  # Run the app
    python -m togglemaster --reset-state    # Wipe the encrypted store and its keyset
    python -m togglemaster --help           # Show help
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .core.config import Config
from .core.store import StateStore, default_data_dir


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, log_config.get("level", "INFO"))

    log_file = log_config.get("file", "logs/togglemaster.log")
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file),
        ],
    )


def reset_state(config: Config, data_dir: Path | None = None) -> None:
    """Delete the encrypted store and its keyset."""
    logger = logging.getLogger(__name__)
    store = StateStore.from_config(config["storage"], data_dir or default_data_dir())
    store.reset()
    logger.info("Encrypted state reset")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="ToggleMaster - Biometric-gated flashlight toggle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m togglemaster                  Run the app
    python -m togglemaster --debug          Development config, no biometric prompt
    python -m togglemaster --reset-state    Forget the saved state and key
        """,
    )
    parser.add_argument("--config", type=str, help="Path to configuration directory")
    parser.add_argument("--debug", action="store_true", help="Use the development environment")
    parser.add_argument(
        "--data-dir", type=str, help="Directory of the encrypted store (overrides config)"
    )
    parser.add_argument(
        "--reset-state", action="store_true", help="Delete the encrypted state and exit"
    )

    args = parser.parse_args(argv)

    if args.debug:
        os.environ["TOGGLEMASTER_ENV"] = "development"
    if args.data_dir:
        os.environ["TOGGLEMASTER_STORAGE__DIRECTORY"] = args.data_dir

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("ToggleMaster starting...")
    logger.info(f"Environment: {config.env}")

    if args.reset_state:
        reset_state(config)
        return 0

    # Kivy is imported only when the UI actually runs
    from .mobile.app import run_mobile_app

    run_mobile_app(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
