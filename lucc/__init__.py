from .events import (
    AreaRow,
    BarChart,
    Event,
    Legend,
    SequenceRow,
    YearCount,
    area_rows,
    as_event,
    bar_rows,
    count_by_year,
    event,
    frequency_rows,
    pixel_area_km2,
    sequence_rows,
)
from .interval import Interval, InvalidArgument, as_interval, interval, standardize
from .relations import (
    CONVERSES,
    DERIVED,
    RELATIONS,
    AfterSemantics,
    Relation,
    after,
    after_legacy,
    before,
    contains,
    during,
    equals,
    finished_by,
    finishes,
    follows,
    get_relation,
    in_,
    meets,
    met_by,
    overlapped_by,
    overlaps,
    precedes,
    relate,
    started_by,
    starts,
)

__all__ = [
    "Interval",
    "InvalidArgument",
    "interval",
    "as_interval",
    "standardize",
    "Relation",
    "AfterSemantics",
    "RELATIONS",
    "DERIVED",
    "CONVERSES",
    "get_relation",
    "relate",
    "before",
    "after",
    "after_legacy",
    "meets",
    "met_by",
    "overlaps",
    "overlapped_by",
    "starts",
    "started_by",
    "during",
    "contains",
    "finishes",
    "finished_by",
    "equals",
    "in_",
    "follows",
    "precedes",
    "Event",
    "event",
    "as_event",
    "Legend",
    "SequenceRow",
    "YearCount",
    "AreaRow",
    "BarChart",
    "sequence_rows",
    "count_by_year",
    "pixel_area_km2",
    "bar_rows",
    "frequency_rows",
    "area_rows",
]
