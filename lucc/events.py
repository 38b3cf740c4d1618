"""Land-use change events and chart data preparation.

An event is a classified interval at one location: a pixel or polygon
`index`, the period it covers and the land-use `label` observed. The
functions here reshape event series into the rows a plotting library needs
for sequence, bar, frequency-polygon and area charts. Nothing is drawn.

Example:
    >>> events = [
    ...     event(1, "2001-09-01", "2002-08-31", "Forest"),
    ...     event(1, "2002-09-01", "2003-08-31", "Pasture"),
    ... ]
    >>> count_by_year(events)
    [YearCount(year=2002, label='Forest', count=1), ...]
"""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

from lucc.interval import Interval, InvalidArgument, format_bound, interval
from lucc.relations import after, before
from lucc.util import (
    DEFAULT_END_DATE,
    DEFAULT_PIXEL_RESOLUTION,
    DEFAULT_START_DATE,
    SQUARE_METERS_PER_KM2,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Event(Interval):
    index: int
    label: str

    def __str__(self) -> str:
        span = f"{format_bound(self.start)}→{format_bound(self.end)}"
        return f"Event({self.index}, {self.label}: {span})"

    @property
    def start_date(self) -> Any:
        return self.start

    @property
    def end_date(self) -> Any:
        return self.end


def event(index: int, start_date: Any, end_date: Any, label: str) -> Event:
    """Build a normalized event; ISO date strings are parsed."""
    if index is None:
        raise InvalidArgument("Event index is missing.")
    if label is None:
        raise InvalidArgument(f"Event {index} has no label.")
    return Event(
        index=index,
        label=label,
        start=start_date,
        end=end_date,
    )


def as_event(record: Any) -> Event:
    """Coerce an `Event` or a record mapping with the event fields."""
    if isinstance(record, Event):
        return record
    if isinstance(record, Mapping):
        missing = [
            key
            for key in ("index", "start_date", "end_date", "label")
            if key not in record
        ]
        if missing:
            raise InvalidArgument(
                f"Event record is missing fields: {', '.join(missing)}\n"
                f"Got: {dict(record)!r}"
            )
        return event(
            record["index"], record["start_date"], record["end_date"], record["label"]
        )
    raise InvalidArgument(
        f"Expected an Event or a record mapping, got {type(record).__name__!r}"
    )


def _require(value: Any, name: str, hint: str = "") -> None:
    if value is None:
        message = f"{name} must be defined!"
        if hint:
            message += f"\n{hint}"
        raise InvalidArgument(message)


def _ordered(events: Iterable[Any] | None) -> list[Event]:
    _require(events, "events", "Provide the event records to summarize.")
    return sorted((as_event(e) for e in events), key=lambda e: e.index)


def _distinct(labels: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(labels))


@dataclass(frozen=True, kw_only=True)
class Legend:
    """Display configuration handed to the renderer with the chart rows."""

    use_custom_palette: bool = False
    colors: Sequence[str] = ()
    relabel: bool = False
    original_labels: Sequence[str] = ()
    new_labels: Sequence[str] = ()

    def __post_init__(self) -> None:
        for field in ("colors", "original_labels", "new_labels"):
            value = getattr(self, field)
            if isinstance(value, str):
                raise InvalidArgument(
                    f"Legend {field} must be a list of strings, got a single string: {value!r}\n"
                    f"Hint: Use {field}=[{value!r}]"
                )
            object.__setattr__(self, field, tuple(value))

    def resolve(self, labels: Iterable[str]) -> dict[str, str]:
        """Map each label found in the data to the label to display.

        Falls back to showing the original labels when the relabel settings
        do not match the data.
        """
        present = _distinct(labels)
        identity = {label: label for label in present}
        if not self.relabel:
            return identity

        if (
            not self.original_labels
            or len(self.new_labels) != len(present)
            or len(self.original_labels) != len(self.new_labels)
            or not all(label in present for label in self.original_labels)
        ):
            logger.warning(
                "Relabel requested but labels do not match the data; keeping "
                "original labels %s. Provide original_labels and new_labels with "
                "one entry per legend label.",
                present,
            )
            return identity

        mapping = dict(zip(self.original_labels, self.new_labels))
        return {label: mapping.get(label, label) for label in present}

    def palette(self, labels: Iterable[str]) -> list[str] | None:
        """Custom colors for the legend, or None to let the renderer choose."""
        if not self.use_custom_palette:
            return None
        present = _distinct(labels)
        if len(self.colors) != len(present):
            logger.warning(
                "Custom palette requested with %d colors for %d legend labels; "
                "using the default palette.",
                len(self.colors),
                len(present),
            )
            return None
        return list(self.colors)


@dataclass(frozen=True, kw_only=True)
class SequenceRow:
    category: str
    start_date: Any
    end_date: Any
    label: str


@dataclass(frozen=True, kw_only=True)
class YearCount:
    year: int
    label: str
    count: int


@dataclass(frozen=True, kw_only=True)
class AreaRow:
    year: int
    label: str
    value: float


@dataclass(frozen=True, kw_only=True)
class BarChart:
    rows: list[AreaRow]
    position: Literal["dodge", "stack"]


def sequence_rows(
    events: Iterable[Any] | None,
    start_date: Any = DEFAULT_START_DATE,
    end_date: Any = DEFAULT_END_DATE,
) -> list[SequenceRow]:
    """Segments for a sequence chart, one per event, ordered by location.

    Events wholly outside `[start_date, end_date]` are dropped; the others
    are clipped to the window.
    """
    _require(start_date, "start_date", f"Default is {DEFAULT_START_DATE}.")
    _require(end_date, "end_date", f"Default is {DEFAULT_END_DATE}.")
    window = interval(start_date, end_date)

    rows: list[SequenceRow] = []
    for e in _ordered(events):
        if before(e, window) or after(e, window):
            continue
        rows.append(
            SequenceRow(
                category=str(e.index),
                start_date=max(e.start, window.start),
                end_date=min(e.end, window.end),
                label=e.label,
            )
        )
    logger.debug("Prepared %d sequence segments within %s", len(rows), window)
    return rows


def count_by_year(events: Iterable[Any] | None) -> list[YearCount]:
    """Count events per (year of end date, label).

    Every year/label combination seen in the data is reported, including
    zero counts. Rows are grouped by label (alphabetical), years ascending.
    """
    ordered = _ordered(events)
    for e in ordered:
        if not isinstance(e.end, date):
            raise InvalidArgument(
                f"Counting by year needs calendar dates, event {e.index} ends at {e.end!r}"
            )
    counts = Counter((e.end.year, e.label) for e in ordered)
    years = sorted({year for year, _ in counts})
    labels = sorted({label for _, label in counts})
    return [
        YearCount(year=year, label=label, count=counts[(year, label)])
        for label in labels
        for year in years
    ]


def pixel_area_km2(
    pixels: float, pixel_resolution: float | None = DEFAULT_PIXEL_RESOLUTION
) -> float:
    """Area in km² covered by `pixels` square pixels of side `pixel_resolution` meters."""
    _require(
        pixel_resolution,
        "pixel_resolution",
        f"Default is {DEFAULT_PIXEL_RESOLUTION} meters on basis of MODIS image.",
    )
    if pixel_resolution <= 0:
        raise InvalidArgument(
            f"pixel_resolution must be positive, got {pixel_resolution}"
        )
    return pixels * (pixel_resolution * pixel_resolution) / SQUARE_METERS_PER_KM2


def _area_rows(
    events: Iterable[Any] | None, pixel_resolution: float | None
) -> list[AreaRow]:
    return [
        AreaRow(
            year=c.year,
            label=c.label,
            value=pixel_area_km2(c.count, pixel_resolution),
        )
        for c in count_by_year(events)
    ]


def bar_rows(
    events: Iterable[Any] | None,
    pixel_resolution: float | None = DEFAULT_PIXEL_RESOLUTION,
    side_by_side: bool = False,
) -> BarChart:
    """Area in km² per year and label, with the bar arrangement to use."""
    rows = _area_rows(events, pixel_resolution)
    return BarChart(rows=rows, position="dodge" if side_by_side else "stack")


def frequency_rows(
    events: Iterable[Any] | None,
    pixel_resolution: float | None = DEFAULT_PIXEL_RESOLUTION,
) -> list[AreaRow]:
    """Area in km² per year and label, one polygon per label."""
    return _area_rows(events, pixel_resolution)


def area_rows(
    events: Iterable[Any] | None,
    pixel_resolution: float | None = DEFAULT_PIXEL_RESOLUTION,
    perc_area: bool = True,
) -> list[AreaRow]:
    """Stacked area values per year and label.

    With `perc_area` the value is the event count divided by 100, rendered on
    a percentage axis; otherwise it is the area in km².
    """
    if not perc_area:
        return _area_rows(events, pixel_resolution)
    _require(
        pixel_resolution,
        "pixel_resolution",
        f"Default is {DEFAULT_PIXEL_RESOLUTION} meters on basis of MODIS image.",
    )
    return [
        AreaRow(year=c.year, label=c.label, value=c.count / 100)
        for c in count_by_year(events)
    ]
