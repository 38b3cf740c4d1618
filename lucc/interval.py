import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, TypeAlias

from dateutil.parser import isoparse

Timestamp: TypeAlias = date | datetime | int | float


class InvalidArgument(ValueError):
    """Raised when a value cannot be used as an interval or relation argument."""


@dataclass(frozen=True, kw_only=True)
class Interval:
    start: Timestamp
    end: Timestamp

    def __post_init__(self) -> None:
        start, end = standardize(
            parse_bound(self.start, "start"), parse_bound(self.end, "end")
        )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def __str__(self) -> str:
        """Human-friendly string showing the two bounds."""
        return f"Interval({format_bound(self.start)}→{format_bound(self.end)})"


def format_bound(bound: Any) -> str:
    if isinstance(bound, date):
        return bound.isoformat()
    return str(bound)


def parse_bound(value: Any, edge: Literal["start", "end"] = "start") -> Timestamp:
    """Convert an interval bound to a comparable timestamp.

    Accepts:
    - date / datetime: Passed through as-is
    - int / float: Passed through as-is
    - str: ISO-8601 text; date-only strings become `date`, others `datetime`

    Raises:
        InvalidArgument: If the bound is missing or cannot be parsed
    """
    if value is None:
        raise InvalidArgument(
            f"Interval {edge} bound is missing.\n"
            f"Hint: Both bounds are required, e.g. interval('2011-09-01', '2011-10-01')"
        )
    if isinstance(value, bool):
        raise InvalidArgument(
            f"Interval {edge} bound must be a timestamp, got bool: {value!r}"
        )
    if isinstance(value, float) and math.isnan(value):
        raise InvalidArgument(
            f"Interval {edge} bound is NaN, which cannot be ordered against anything."
        )
    if isinstance(value, (date, int, float)):
        return value
    if isinstance(value, str):
        try:
            parsed = isoparse(value)
        except (ValueError, OverflowError) as exc:
            raise InvalidArgument(
                f"Interval {edge} bound is not an ISO-8601 date: {value!r}\n"
                f"Examples: '2011-09-01', '2011-09-01T12:00:00'"
            ) from exc
        if len(value.strip()) <= 10:
            return parsed.date()
        return parsed
    raise InvalidArgument(
        f"Interval {edge} bound must be a date, datetime, number or ISO string.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def standardize(start: Any, end: Any) -> tuple[Any, Any]:
    """Order two bounds so the earlier one comes first.

    Raises:
        InvalidArgument: If either bound is missing or the bounds cannot be
            compared with each other
    """
    if start is None or end is None:
        missing = "start" if start is None else "end"
        raise InvalidArgument(f"Interval {missing} bound is missing.")
    try:
        swapped = start > end
    except TypeError as exc:
        raise InvalidArgument(
            f"Interval bounds are not comparable.\n"
            f"Got start={start!r} ({type(start).__name__}), "
            f"end={end!r} ({type(end).__name__})"
        ) from exc
    if swapped:
        return end, start
    return start, end


def as_interval(value: Any) -> Interval:
    """Coerce an interval-like value to a normalized `Interval`.

    Interval-like values are `Interval` instances, objects exposing `start`
    and `end` attributes, or `(start, end)` pairs. Bounds are re-normalized
    even for objects that claim to be intervals already.
    """
    if isinstance(value, Interval):
        return value
    if value is None:
        raise InvalidArgument("Expected an interval, got None.")
    if hasattr(value, "start") and hasattr(value, "end"):
        return interval(value.start, value.end)
    if isinstance(value, Sequence) and not isinstance(value, str):
        if len(value) != 2:
            raise InvalidArgument(
                f"An interval pair needs exactly two bounds, got {len(value)}: {value!r}"
            )
        return interval(value[0], value[1])
    raise InvalidArgument(
        f"Expected an interval, got {type(value).__name__!r}: {value!r}\n"
        f"Hint: Use interval(start, end) or pass a (start, end) pair"
    )


def interval(start: Any, end: Any) -> Interval:
    """Build a normalized interval between two timestamps.

    Bounds may be given in either order; ISO date strings are parsed.

    Example:
        >>> interval("2011-10-01", "2011-09-01")
        Interval(start=datetime.date(2011, 9, 1), end=datetime.date(2011, 10, 1))
    """
    return Interval(start=start, end=end)
