"""Entrypoint. Loads config, bridges the configured source and logs its events."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
import threading
from pathlib import Path
from typing import Any

from loguru import logger

from pushbridge import __version__
from pushbridge.config import Config, cfg, load_config_with_env
from pushbridge.core.errors import BridgeConfigurationError, ProducerError
from pushbridge.gateway import Bridge

# Third-party libraries to intercept and route through loguru
_INTERCEPTED_LIBRARIES = ["dotenv", "dotenv.main"]

_DEFAULTS: dict[str, Any] = {"source": {"kind": "interval", "interval_seconds": 1.0}}


def _intercept_logging(level: str) -> None:
    """Route stdlib logging records to loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                log_level: str | int = logger.level(record.levelname).name
            except ValueError:
                log_level = record.levelno
            msg = record.getMessage().replace("{", "{{").replace("}", "}}")
            logger.patch(
                lambda r: r.update(
                    name=record.name,
                    function=record.funcName,
                    line=record.lineno,
                ),
            ).opt(exception=record.exc_info).log(log_level, msg)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for lib in _INTERCEPTED_LIBRARIES:
        lib_logger = logging.getLogger(lib)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        lib_logger.setLevel(level)


def _safe_message_filter(record: Any) -> bool:
    """Escape braces/angles in log messages to prevent format/tag errors."""
    if isinstance(record.get("message"), str):
        msg = record["message"]
        msg = msg.replace("{", "{{").replace("}", "}}").replace("<", "\\<")
        record["message"] = msg
    return True


def setup_logging(verbose: bool = False, default_level: str = "INFO") -> None:
    """Configure loguru. Replace default logging.
    Level: verbose=True or LOG_LEVEL=DEBUG enables DEBUG; otherwise default_level."""
    level = default_level
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=("<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}"),
        filter=_safe_message_filter,
    )
    _intercept_logging(level)


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path, _DEFAULTS)
    cfg.reload(data)
    return cfg


def run(bridge: Bridge[Any], seconds: float | None, stop: threading.Event | None = None) -> int:
    """Subscribe a logging consumer, activate, and wait for the stream to end.

    Returns the process exit code: 1 if the producer failed, else 0.
    """
    stop = stop or threading.Event()
    outcome: dict[str, ProducerError | None] = {"error": None}

    def on_error(error: ProducerError) -> None:
        outcome["error"] = error
        stop.set()

    subscription = bridge.stream().subscribe(
        on_value=lambda value: logger.info("event: {!r}", value),
        on_error=on_error,
        on_complete=stop.set,
    )
    bridge.activate()
    try:
        if not stop.wait(seconds):
            logger.info("Run time of {}s elapsed", seconds)
    finally:
        bridge.deactivate()
        subscription.cancel()

    if outcome["error"] is not None:
        logger.error("Stream failed: {}", outcome["error"])
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entrypoint."""
    parser = argparse.ArgumentParser(description="pushbridge: log the events of a bridged push-source")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--seconds",
        "-s",
        type=float,
        default=None,
        help="Stop after this many seconds (default: run_seconds from config, else until the stream ends)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        sys.exit(1)

    try:
        config = reload_config(args.config)
        setup_logging(args.verbose, config.log_level)
        bridge = Bridge.create(config.source)
    except BridgeConfigurationError as exc:
        logger.error("Invalid config ({}): {}", exc.code, exc)
        sys.exit(1)
    logger.info("Config loaded from {}", args.config)

    stop = threading.Event()

    def on_signal(signum: int, _frame: object) -> None:
        logger.info("Received signal {}, shutting down", signum)
        stop.set()

    signal.signal(signal.SIGINT, on_signal)
    signal.signal(signal.SIGTERM, on_signal)

    seconds = args.seconds if args.seconds is not None else config.run_seconds
    sys.exit(run(bridge, seconds, stop))


if __name__ == "__main__":
    main()
