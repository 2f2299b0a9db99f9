"""Time-ordered 64-bit unique ID generation."""

from snowgen.generator import ClockRegressionError, SnowflakeGenerator
from snowgen.utils import generate_snowflake_id, get_default_generator

__all__ = [
    "ClockRegressionError",
    "SnowflakeGenerator",
    "generate_snowflake_id",
    "get_default_generator",
]

__version__ = "0.1.0"
