"""
main_asyncio.py - Application entry point for the PiGlow controller
-----------------------------------------------------------------

Responsible for:
- parsing the command line and loading configuration
- choosing the command source (HTTP queue, one-shot -a, or -l listing)
- wiring device, dispatcher and shutdown handlers
- graceful shutdown on Ctrl+C / SIGTERM or a fatal dispatcher error
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (important for Raspberry Pi)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import AsyncIterable, List, Optional

from commands import HttpQueueSource, available_colors, describe_animations, single_command_source
from engine import Dispatcher
from hardware.device import create_device
from lifecycle import ShutdownCoordinator, TaskRegistry, TaskCategory, create_tracked_task
from lifecycle.handlers import DeviceShutdownHandler, DispatcherShutdownHandler, TaskCancellationHandler
from managers import ConfigManager
from models.config import AppConfig
from models.enums import LogCategory, LogLevel
from models.errors import DeviceInitError
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


# ---------------------------------------------------------------------------
# COMMAND LINE
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blinky",
        description="Drive a PiGlow from a command or an HTTP command queue"
    )
    parser.add_argument(
        "-a",
        "--animation",
        default=None,
        help="Animation or color to run (default: command_source.default_animation)",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List animations and colors, then exit",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config/config.yaml",
        help="Path to config.yaml (relative paths resolve against src/)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging",
    )
    return parser


def print_listing() -> None:
    print("Available animations:")
    for line in describe_animations():
        print(f"  {line}")
    print("Available colors:")
    for color in available_colors():
        print(f"  {color}")


def select_source(args: argparse.Namespace, config: AppConfig) -> Optional[AsyncIterable[str]]:
    """
    Mode selection:
    1. queue URL configured (WEBQUEUE / command_source.webqueue) → poll mode
    2. -l → None (listing only)
    3. otherwise one-shot -a command
    """
    source_config = config.command_source

    if source_config.webqueue:
        return HttpQueueSource(
            source_config.webqueue,
            timeout=source_config.request_timeout,
            idle_delay=source_config.idle_delay,
        )
    if args.list:
        return None
    return single_command_source(args.animation or source_config.default_animation)


# ---------------------------------------------------------------------------
# MAIN
# ---------------------------------------------------------------------------

async def main(argv: Optional[List[str]] = None) -> int:
    """Main async entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager(args.config)
    config = config_manager.load()

    configure_logger(
        LogLevel.DEBUG if args.verbose else config.logging.level,
        use_colors=config.logging.use_colors
    )

    source = select_source(args, config)
    if source is None:
        print_listing()
        return 0

    log.info("Starting PiGlow controller...")

    # ========================================================================
    # 2. DEVICE
    # ========================================================================

    try:
        device = create_device(config.device)
    except DeviceInitError as ex:
        log.error("Couldn't initialize PiGlow", error=ex.message)
        return 1

    # ========================================================================
    # 3. DISPATCHER
    # ========================================================================

    dispatcher = Dispatcher(device, config.animations)
    dispatcher_task = create_tracked_task(
        dispatcher.run(source),
        category=TaskCategory.DISPATCHER,
        description="Command Dispatcher"
    )

    # ========================================================================
    # 4. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(DispatcherShutdownHandler(dispatcher, dispatcher_task))
    coordinator.register(DeviceShutdownHandler(device))
    coordinator.register(TaskCancellationHandler())

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    log.info("Controller running. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    log.debug(TaskRegistry.instance().summary())

    if coordinator.triggered_by_failure:
        log.error("Controller stopped after a fatal error", reason=coordinator.reason)
        return 1

    log.info("PiGlow controller shut down cleanly.")
    return 0


def run() -> None:
    """Console script entry point (blinky)."""
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        status = 0
    sys.exit(status)


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run()
