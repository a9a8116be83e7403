"""
TrackSlot - Entry Point
"""
import sys
from pathlib import Path

# Add src to path for running as script
sys.path.insert(0, str(Path(__file__).parent))

from config import LOG_LEVEL
from logging_config import configure_logging
from ui.main_window import main as window_main


def main():
    """Application entry point"""
    configure_logging(LOG_LEVEL)
    window_main()


if __name__ == "__main__":
    main()
