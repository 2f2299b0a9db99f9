"""Thread-safe Snowflake-style 64-bit ID generator."""

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Custom epoch (2015-01-01 00:00:00 UTC)
DEFAULT_EPOCH = 1420070400000

TIMESTAMP_BITS = 41
DATACENTER_ID_BITS = 5
SERVER_ID_BITS = 5
SEQUENCE_BITS = 12

MAX_DATACENTER_ID = (1 << DATACENTER_ID_BITS) - 1  # 31
MAX_SERVER_ID = (1 << SERVER_ID_BITS) - 1  # 31
SEQUENCE_MASK = (1 << SEQUENCE_BITS) - 1  # 4095

SERVER_ID_SHIFT = SEQUENCE_BITS
DATACENTER_ID_SHIFT = SEQUENCE_BITS + SERVER_ID_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + SERVER_ID_BITS + DATACENTER_ID_BITS


class ClockRegressionError(RuntimeError):
    """The wall clock reported a time earlier than one already used for an ID."""

    def __init__(self, last_timestamp: int, current_timestamp: int) -> None:
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        self.offset_ms = last_timestamp - current_timestamp
        super().__init__(
            f"Clock moved backwards by {self.offset_ms} ms "
            f"(last={last_timestamp}, now={current_timestamp})"
        )


def _current_millis() -> int:
    return int(time.time() * 1000)


class SnowflakeGenerator:
    """
    Twitter Snowflake-like ID generator.

    Structure:
    - 1 bit unused (sign)
    - 41 bits timestamp (milliseconds since epoch)
    - 5 bits datacenter ID
    - 5 bits server ID
    - 12 bits sequence number

    Every call to next_id() runs under one lock, so the values handed out
    by a single instance are strictly increasing in the order calls finish.
    """

    def __init__(
        self,
        datacenter_id: int,
        server_id: int,
        epoch: int = DEFAULT_EPOCH,
        clock: Callable[[], int] | None = None,
        wait_interval: float = 0.0,
    ) -> None:
        if not 0 <= datacenter_id <= MAX_DATACENTER_ID:
            raise ValueError(f"datacenter_id must be between 0 and {MAX_DATACENTER_ID}")
        if not 0 <= server_id <= MAX_SERVER_ID:
            raise ValueError(f"server_id must be between 0 and {MAX_SERVER_ID}")
        if epoch < 0:
            raise ValueError("epoch must not be negative")
        if wait_interval < 0:
            raise ValueError("wait_interval must not be negative")

        self._clock = clock or _current_millis
        if epoch > self._clock():
            raise ValueError("epoch must not be in the future")

        self._datacenter_id = datacenter_id
        self._server_id = server_id
        self._epoch = epoch
        self._wait_interval = wait_interval

        self._sequence = 0
        self._last_timestamp = -1
        self._lock = threading.Lock()

        logger.info(
            "Snowflake generator ready (datacenter=%d, server=%d, epoch=%d)",
            datacenter_id,
            server_id,
            epoch,
        )

    @property
    def datacenter_id(self) -> int:
        return self._datacenter_id

    @property
    def server_id(self) -> int:
        return self._server_id

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last_timestamp(self) -> int:
        return self._last_timestamp

    @property
    def sequence(self) -> int:
        return self._sequence

    def _timestamp(self) -> int:
        return self._clock() - self._epoch

    def _wait_next_millis(self, last_timestamp: int) -> int:
        """Block until the clock moves past last_timestamp."""
        timestamp = self._timestamp()
        while timestamp <= last_timestamp:
            if self._wait_interval:
                time.sleep(self._wait_interval)
            timestamp = self._timestamp()
        return timestamp

    def next_id(self) -> int:
        """Return the next ID.

        Raises:
            ClockRegressionError: the clock is behind the last used timestamp.
        """
        with self._lock:
            timestamp = self._timestamp()

            # Before the first ID the floor is the epoch itself
            floor = max(self._last_timestamp, 0)
            if timestamp < floor:
                logger.warning(
                    "Clock moved backwards by %d ms, refusing to generate ID",
                    floor - timestamp,
                )
                raise ClockRegressionError(floor, timestamp)

            if timestamp == self._last_timestamp:
                sequence = (self._sequence + 1) & SEQUENCE_MASK
                if sequence == 0:
                    # Sequence exhausted, wait for next millisecond
                    logger.debug("Sequence exhausted at %d, waiting for next millisecond", timestamp)
                    timestamp = self._wait_next_millis(self._last_timestamp)
            else:
                sequence = 0

            self._sequence = sequence
            self._last_timestamp = timestamp

            return (
                (timestamp << TIMESTAMP_SHIFT)
                | (self._datacenter_id << DATACENTER_ID_SHIFT)
                | (self._server_id << SERVER_ID_SHIFT)
                | sequence
            )

    def __iter__(self) -> "SnowflakeGenerator":
        return self

    def __next__(self) -> int:
        return self.next_id()

    def __repr__(self) -> str:
        return (
            f"SnowflakeGenerator(datacenter_id={self._datacenter_id}, "
            f"server_id={self._server_id}, epoch={self._epoch})"
        )
