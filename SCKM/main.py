#!/usr/bin/env python3
"""
SCKM - Main Entry Point
Run the SC Kill Monitor terminal UI
"""
import os
import sys

from dotenv import load_dotenv

from SCKM.log_setup import setup_logging
from SCKM.UI import run_app
from SCKM.util import app_data_dir


def main() -> None:
    load_dotenv()
    data_dir = app_data_dir()
    logger = setup_logging(data_dir / "app_log", os.getenv("SCKM_LOG_LEVEL", "INFO"))

    print("Starting SC Kill Monitor...")
    print("Press 'q' to quit, 's' for Scan, 'c' for Settings, 'a' for About")
    print("-" * 80)

    try:
        run_app(data_dir)
    except KeyboardInterrupt:
        print("\nSC Kill Monitor terminated by user")
    except Exception as e:
        logger.critical(f"Error running SC Kill Monitor: {e}", exc_info=True)
        print(f"\nError running SC Kill Monitor: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
