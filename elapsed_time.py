#!/usr/bin/env python3
"""
Human-readable elapsed time.

Formats a duration into a short string with appropriate units:
- Sub-second durations: Shows three decimal places (e.g., "0.500s")
- Whole seconds: Shows just seconds (e.g., "5s")
- Minutes and up: Shows all units below the largest one (e.g., "2m 5s", "1h 1m 5s")
- Exact minutes: Shows bare minutes (e.g., "1m")
- Supports up to weeks for long-running operations (e.g., "1w 2d 3h 4m 5s")

Usage:
    elapsed = measure_elapsed_time(my_function)
    format_duration(125)  # "2m 5s"

    with elapsed_timer() as timer:
        do_work()
    print(timer.formatted)
"""
import logging
import math
import numbers
import subprocess
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

__all__ = [
    "DurationComponents",
    "ElapsedTimer",
    "decompose",
    "elapsed_timer",
    "format_components",
    "format_duration",
    "measure_elapsed_time",
    "main",
    "MILLIS_PER_SECOND",
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "SECONDS_PER_WEEK",
]

logger = logging.getLogger(__name__)

MILLIS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY


@dataclass(frozen=True)
class DurationComponents:
    """A duration broken down into non-overlapping units.

    Fields hold the "remaining" amount of each unit, so remaining_hours
    is always below 24 and remaining_days below 7.
    """

    weeks: int
    remaining_days: int
    remaining_hours: int
    minutes: int
    seconds: int
    milliseconds: int

    @property
    def total_milliseconds(self):
        """The whole duration in milliseconds."""
        total_seconds = (
            self.weeks * SECONDS_PER_WEEK
            + self.remaining_days * SECONDS_PER_DAY
            + self.remaining_hours * SECONDS_PER_HOUR
            + self.minutes * SECONDS_PER_MINUTE
            + self.seconds
        )
        return total_seconds * MILLIS_PER_SECOND + self.milliseconds


def _to_milliseconds(duration):
    """Convert a timedelta or a number of seconds to whole milliseconds (truncated)."""
    if isinstance(duration, timedelta):
        if duration < timedelta(0):
            raise ValueError(f"Duration must be non-negative, got {duration!r}")
        return duration // timedelta(milliseconds=1)
    if isinstance(duration, bool) or not isinstance(duration, (numbers.Real, Decimal)):
        raise TypeError(
            f"Duration must be a timedelta or a number of seconds, got {type(duration).__name__}"
        )
    if isinstance(duration, Decimal):
        finite = duration.is_finite()
    else:
        finite = isinstance(duration, numbers.Rational) or math.isfinite(duration)
    if not finite:
        raise ValueError(f"Duration must be finite, got {duration!r}")
    if duration < 0:
        raise ValueError(f"Duration must be non-negative, got {duration!r}")
    if isinstance(duration, numbers.Integral):
        return int(duration) * MILLIS_PER_SECOND
    if isinstance(duration, numbers.Rational):
        return int(duration * MILLIS_PER_SECOND)
    if not isinstance(duration, Decimal):
        # Truncate the shortest decimal form: 1.001 is 1 ms, 0.9999999999 is 999 ms
        duration = Decimal(repr(float(duration)))
    return int(duration * MILLIS_PER_SECOND)


def decompose(duration):
    """
    Break a duration down into weeks, days, hours, minutes, seconds and milliseconds.
    Accepts a datetime.timedelta or a non-negative number of seconds
    (int, float, Fraction, Decimal or any other real number).
    Anything below a millisecond is truncated.
    """
    total_seconds, milliseconds = divmod(_to_milliseconds(duration), MILLIS_PER_SECOND)

    hours = total_seconds // SECONDS_PER_HOUR
    days = hours // 24
    weeks = days // 7

    return DurationComponents(
        weeks=weeks,
        remaining_days=days % 7,
        remaining_hours=hours % 24,
        minutes=(total_seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE,
        seconds=total_seconds % SECONDS_PER_MINUTE,
        milliseconds=milliseconds,
    )


def _format_seconds(secs, ms):
    if secs == 0 and ms > 0:
        return f"0.{ms:03d}s"
    elif ms == 0:
        return f"{secs}s"
    else:
        return f"{secs}.{ms:03d}s"


def format_components(components):
    """Render DurationComponents, starting from the most significant non-zero unit."""
    c = components
    seconds_field = _format_seconds(c.seconds, c.milliseconds)

    parts = []
    if c.weeks > 0:
        parts.append(f"{c.weeks}w")
        parts.append(f"{c.remaining_days}d")
        parts.append(f"{c.remaining_hours}h")
        parts.append(f"{c.minutes}m")
        parts.append(seconds_field)
    elif c.remaining_days > 0:
        parts.append(f"{c.remaining_days}d")
        parts.append(f"{c.remaining_hours}h")
        parts.append(f"{c.minutes}m")
        parts.append(seconds_field)
    elif c.remaining_hours > 0:
        parts.append(f"{c.remaining_hours}h")
        parts.append(f"{c.minutes}m")
        parts.append(seconds_field)
    elif c.minutes > 0:
        parts.append(f"{c.minutes}m")
        if c.seconds > 0 or c.milliseconds > 0:
            parts.append(seconds_field)
    else:
        parts.append(seconds_field)
    return " ".join(parts)


def format_duration(duration):
    """
    Formats a duration into a human-readable string with appropriate units.
    The duration is a datetime.timedelta or a number of seconds.

        format_duration(5)        -> "5s"
        format_duration(0.5)      -> "0.500s"
        format_duration(125)      -> "2m 5s"
        format_duration(3665)     -> "1h 1m 5s"
    """
    return format_components(decompose(duration))


def measure_elapsed_time(func, *args, **kwargs):
    """
    Measures the elapsed time of a function and returns a formatted string.
    Usage:
        def my_function(): ...
        elapsed = measure_elapsed_time(my_function)
        print(elapsed)
    Or with arguments:
        elapsed = measure_elapsed_time(some_func, arg1, arg2)
    Exceptions raised by the function propagate to the caller.
    """
    start = time.perf_counter()
    func(*args, **kwargs)
    end = time.perf_counter()
    elapsed = format_duration(end - start)
    logger.debug("%s finished in %s", getattr(func, "__qualname__", repr(func)), elapsed)
    return elapsed


class ElapsedTimer:
    """Start/stop timer with formatted output"""

    def __init__(self):
        self._start = None
        self._end = None

    def start(self):
        self._start = time.perf_counter()
        self._end = None
        return self

    def stop(self):
        """Record the end time and return elapsed seconds"""
        if self._start is not None and self._end is None:
            self._end = time.perf_counter()
        return self.seconds

    @property
    def seconds(self):
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return end - self._start

    @property
    def formatted(self):
        return format_duration(self.seconds)


@contextmanager
def elapsed_timer():
    """Time a block of code; the timer is stopped even if the block raises."""
    timer = ElapsedTimer().start()
    try:
        yield timer
    finally:
        timer.stop()


def main(argv=None):
    """
    Run a command and report how long it took.
    Usage: elapsed-time [-v] COMMAND [ARGS...]
    -v logs debug details to stderr. Exits with the command's return code,
    or 128 + signal number when the command was killed by a signal.
    """
    if argv is None:
        argv = sys.argv[1:]
    verbose = bool(argv) and argv[0] in ("-v", "--verbose")
    if verbose:
        argv = argv[1:]
    if not argv:
        print("Usage: elapsed-time [-v] COMMAND [ARGS...]")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    returncodes = []

    def run_command():
        logger.debug("Running %s", " ".join(argv))
        returncodes.append(subprocess.run(argv, check=False).returncode)

    try:
        elapsed = measure_elapsed_time(run_command)
    except OSError as e:
        print(f"Error: could not run {argv[0]}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Elapsed time: {elapsed}", file=sys.stderr)
    returncode = returncodes[0]
    if returncode < 0:
        # killed by signal -returncode
        returncode = 128 - returncode
    sys.exit(returncode)


if __name__ == "__main__":
    main()
