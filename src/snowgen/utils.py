import logging
import sys
import threading

from snowgen.config import LoggingSettings, NodeSettings, load_settings
from snowgen.generator import SnowflakeGenerator


def build_generator(settings: NodeSettings | None = None) -> SnowflakeGenerator:
    """Create a generator for the given node settings."""
    settings = settings or NodeSettings()
    return SnowflakeGenerator(
        datacenter_id=settings.datacenter_id,
        server_id=settings.server_id,
        epoch=settings.epoch_ms,
        wait_interval=settings.wait_interval,
    )


# Global instance
# In a real distributed system, (datacenter_id, server_id) must be unique per
# node. They come from SNOWGEN_NODE__* or .env, see config.py.
_generator: SnowflakeGenerator | None = None
_generator_lock = threading.Lock()


def get_default_generator() -> SnowflakeGenerator:
    global _generator
    if _generator is None:
        with _generator_lock:
            if _generator is None:
                _generator = build_generator(load_settings().node)
    return _generator


def reset_default_generator() -> None:
    """Forget the global instance; the next call rebuilds it from settings."""
    global _generator
    with _generator_lock:
        _generator = None


def generate_snowflake_id() -> int:
    return get_default_generator().next_id()


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Attach a handler to the package logger. Safe to call more than once."""
    settings = settings or LoggingSettings()
    logger = logging.getLogger("snowgen")
    logger.setLevel(settings.level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if settings.file:
        handler = logging.FileHandler(settings.file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.format))
    logger.addHandler(handler)
    return logger
