#!/usr/bin/env python3
"""
Cozy Kitchen - console demo wiring a Handlebars planner to Microsoft Graph and native plugins
"""

import os
import sys
import asyncio
import signal
import logging
from logging.handlers import RotatingFileHandler
import argparse
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .core import Config, PlannerContext, PlannerHostedService

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG = PROJECT_ROOT / 'config.yaml'

logger = logging.getLogger(__name__)


def setup_logging(logs_dir: Path):
    """Setup logging with rotating file handlers under data/logs/"""

    logs_dir.mkdir(parents=True, exist_ok=True)

    # Create rotating file handler
    file_handler = RotatingFileHandler(
        logs_dir / 'cozy_kitchen.log',
        maxBytes=20 * 1024 * 1024,  # 20MB
        backupCount=10,
        encoding='utf-8'
    )

    # Create console handler
    console_handler = logging.StreamHandler()

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    # Configure root logger
    logging.basicConfig(
        level=logging.INFO,
        handlers=[file_handler, console_handler]
    )


class PlannerRunner:
    """Hosts the planner service: builds the context, starts and stops it"""

    def __init__(self, config: Config):
        self.config = config
        self.context = None
        self.service = None
        self.stopping = None
        self.running = False
        self._loop = None

    async def initialize(self):
        """Create the shared context and the hosted service"""
        self._loop = asyncio.get_running_loop()
        self.stopping = asyncio.Event()
        self.context = PlannerContext.create(self.config)
        self.service = PlannerHostedService(self.context)
        logger.info("Planner service ready")

    async def run(self):
        """Run the service until its loop ends"""

        self.running = True
        try:
            await self.service.start(self.stopping)
        except KeyboardInterrupt:
            logger.info("Received interrupt signal")
        finally:
            await self.shutdown()

    async def shutdown(self):
        """Stop the service and dispose of HTTP clients"""

        if not self.running:
            return

        self.running = False
        await self.service.stop()
        await self.context.http_client_factory.close()
        logger.info("Shutdown complete")

    def handle_signal(self, sig, frame):
        """Handle system signals"""

        logger.info(f"Received signal {sig}")
        if self._loop is not None and self.stopping is not None:
            self._loop.call_soon_threadsafe(self.stopping.set)


def load_config(config_path: Optional[Path], plugins_root: Optional[Path] = None) -> Config:
    """Load config.yaml when present, else defaults; apply CLI overrides"""
    if config_path and config_path.exists():
        config = Config.from_yaml(config_path)
    else:
        config = Config()

    if plugins_root is not None:
        config.plugins_dir = plugins_root
    return config


async def main(argv=None):
    """Main entry point"""

    parser = argparse.ArgumentParser(description="Cozy Kitchen planner console")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--plugins-root",
        type=Path,
        help="Folder holding the prompt plugin directories"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config, args.plugins_root)
    setup_logging(Path(os.getenv('DATA_DIR', config.data_dir)) / 'logs')

    runner = PlannerRunner(config)

    # Setup signal handlers
    signal.signal(signal.SIGINT, runner.handle_signal)
    signal.signal(signal.SIGTERM, runner.handle_signal)

    await runner.initialize()
    await runner.run()


def run():
    load_dotenv(dotenv_path=PROJECT_ROOT / '.env')
    try:
        asyncio.run(main())
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
