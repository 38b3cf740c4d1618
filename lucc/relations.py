"""Allen's interval algebra.

The thirteen base relations between two intervals I (`first`) and J
(`second`), plus the derived relations used when composing predicates over
land-use event series.

    before         I---|     |---J
    meets          I---|J-------
    overlaps       I------|
                      |---J----
    starts         |I---|
                   |----J----|
    during            |--I--|
                   |----J----|
    finishes             |--I|
                   |----J----|
    equals         |----I----|
                   |----J----|

The remaining six (after, met_by, overlapped_by, started_by, contains,
finished_by) are the converses of the first six.

Every relation is a callable object:

    >>> from lucc import interval, meets, during, starts, finishes
    >>> meets(interval("2011-09-01", "2011-10-01"), interval("2011-10-01", "2011-11-01"))
    True
    >>> within = during | starts | finishes
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date, datetime
from enum import Enum
from typing import Any

from typing_extensions import override

from lucc.interval import Interval, InvalidArgument, as_interval


class AfterSemantics(Enum):
    """Which comparison `after` performs.

    CANONICAL is Allen's definition, `start_I > end_J`, the converse of
    `before`. LEGACY reproduces the comparison shipped by the first lucC
    release, `end_I > start_J`, which holds for most overlapping pairs too.
    """

    CANONICAL = "canonical"
    LEGACY = "legacy"


def _coerce_semantics(semantics: "AfterSemantics | str") -> AfterSemantics:
    try:
        return AfterSemantics(semantics)
    except ValueError as exc:
        valid = ", ".join(s.value for s in AfterSemantics)
        raise InvalidArgument(
            f"Unknown after semantics: {semantics!r}\nValid choices: {valid}"
        ) from exc


def _kind(bound: Any) -> str:
    # datetime subclasses date, so check it first
    if isinstance(bound, datetime):
        return "datetime"
    if isinstance(bound, date):
        return "date"
    return "number"


def _ensure_comparable(first: Interval, second: Interval) -> None:
    """Raise TypeError unless the bounds of both intervals can be ordered.

    Equality between unrelated types quietly returns False, so `meets` or
    `equals` would never notice a mismatch on their own.
    """
    if _kind(first.start) != _kind(second.start):
        raise TypeError(
            f"{_kind(first.start)} bounds against {_kind(second.start)} bounds"
        )
    # naive against aware datetimes only fails on ordering
    first.start < second.start


class Relation(ABC):
    """A binary predicate over two intervals.

    Calling a relation normalizes both arguments and then evaluates `holds`.
    Relations compose with `|` (any), `&` (all) and `~` (not).
    """

    name: str = "relation"

    @abstractmethod
    def holds(self, first: Interval, second: Interval) -> bool:
        """Evaluate on two already-normalized intervals."""
        pass

    def __call__(self, first: Any, second: Any) -> bool:
        i, j = as_interval(first), as_interval(second)
        try:
            _ensure_comparable(i, j)
            return self.holds(i, j)
        except TypeError as exc:
            raise InvalidArgument(
                f"Cannot compare {i} with {j}.\n"
                f"Hint: Both intervals need bounds of the same timestamp type"
            ) from exc

    def __or__(self, other: "Relation") -> "Relation":
        if not isinstance(other, Relation):
            return NotImplemented
        return AnyOf(self, other)

    def __and__(self, other: "Relation") -> "Relation":
        if not isinstance(other, Relation):
            return NotImplemented
        return AllOf(self, other)

    def __invert__(self) -> "Relation":
        return Not(self)

    @property
    def converse(self) -> "Relation":
        """The same relation with its arguments swapped."""
        return Converse(self)

    @override
    def __repr__(self) -> str:
        return f"<Relation {self.name}>"


class Comparison(Relation):
    def __init__(self, name: str, test: Callable[[Interval, Interval], bool]):
        self.name: str = name
        self.test: Callable[[Interval, Interval], bool] = test

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        return bool(self.test(first, second))


class After(Relation):
    def __init__(self, semantics: AfterSemantics | str = AfterSemantics.CANONICAL):
        self.semantics: AfterSemantics = _coerce_semantics(semantics)
        self.name: str = (
            "after" if self.semantics is AfterSemantics.CANONICAL else "after_legacy"
        )

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        if self.semantics is AfterSemantics.LEGACY:
            return first.end > second.start
        return first.start > second.end

    @override
    def __call__(
        self,
        first: Any,
        second: Any,
        semantics: AfterSemantics | str | None = None,
    ) -> bool:
        if semantics is None or _coerce_semantics(semantics) is self.semantics:
            return super().__call__(first, second)
        return After(semantics)(first, second)


class AnyOf(Relation):
    def __init__(self, *relations: Relation, name: str | None = None):
        flattened: list[Relation] = []
        for relation in relations:
            # Unnamed disjunctions are merged; named ones stay opaque
            if isinstance(relation, AnyOf) and relation._anonymous:
                flattened.extend(relation.relations)
            else:
                flattened.append(relation)
        self.relations: tuple[Relation, ...] = tuple(flattened)
        self._anonymous: bool = name is None
        self.name: str = name or " | ".join(r.name for r in self.relations)

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        return any(r.holds(first, second) for r in self.relations)


class AllOf(Relation):
    def __init__(self, *relations: Relation, name: str | None = None):
        self.relations: tuple[Relation, ...] = relations
        self.name: str = name or " & ".join(f"({r.name})" for r in relations)

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        return all(r.holds(first, second) for r in self.relations)


class Not(Relation):
    def __init__(self, relation: Relation):
        self.relation: Relation = relation
        self.name: str = f"~({relation.name})"

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        return not self.relation.holds(first, second)

    @override
    def __invert__(self) -> Relation:
        return self.relation


class Converse(Relation):
    def __init__(self, relation: Relation):
        self.relation: Relation = relation
        self.name: str = f"converse({relation.name})"

    @override
    def holds(self, first: Interval, second: Interval) -> bool:
        return self.relation.holds(second, first)

    @property
    @override
    def converse(self) -> Relation:
        return self.relation


class Precedes(AnyOf):
    """`met_by | after`, with the `after` semantics selectable per call."""

    def __init__(self, semantics: AfterSemantics | str = AfterSemantics.CANONICAL):
        self.semantics: AfterSemantics = _coerce_semantics(semantics)
        super().__init__(met_by, After(self.semantics), name="precedes")

    @override
    def __call__(
        self,
        first: Any,
        second: Any,
        semantics: AfterSemantics | str | None = None,
    ) -> bool:
        if semantics is None or _coerce_semantics(semantics) is self.semantics:
            return super().__call__(first, second)
        return Precedes(semantics)(first, second)


before = Comparison("before", lambda i, j: i.end < j.start)
after = After(AfterSemantics.CANONICAL)
after_legacy = After(AfterSemantics.LEGACY)
meets = Comparison("meets", lambda i, j: i.end == j.start)
met_by = Comparison("met_by", lambda i, j: j.end == i.start)
overlaps = Comparison(
    "overlaps",
    lambda i, j: i.start < j.start and i.end > j.start and i.end < j.end,
)
overlapped_by = Comparison(
    "overlapped_by",
    lambda i, j: i.start > j.start and i.start < j.end and i.end > j.end,
)
starts = Comparison("starts", lambda i, j: i.start == j.start and i.end < j.end)
started_by = Comparison(
    "started_by", lambda i, j: i.start == j.start and i.end > j.end
)
during = Comparison("during", lambda i, j: i.start > j.start and i.end < j.end)
contains = Comparison("contains", lambda i, j: i.start < j.start and i.end > j.end)
finishes = Comparison("finishes", lambda i, j: i.start > j.start and i.end == j.end)
finished_by = Comparison(
    "finished_by", lambda i, j: i.start < j.start and i.end == j.end
)
equals = Comparison("equals", lambda i, j: i.start == j.start and i.end == j.end)

in_ = AnyOf(during, starts, finishes, name="in")
follows = AnyOf(meets, before, name="follows")
precedes = Precedes(AfterSemantics.CANONICAL)

RELATIONS: dict[str, Relation] = {
    "before": before,
    "after": after,
    "meets": meets,
    "met_by": met_by,
    "overlaps": overlaps,
    "overlapped_by": overlapped_by,
    "starts": starts,
    "started_by": started_by,
    "during": during,
    "contains": contains,
    "finishes": finishes,
    "finished_by": finished_by,
    "equals": equals,
}

CONVERSES: dict[str, str] = {
    "before": "after",
    "after": "before",
    "meets": "met_by",
    "met_by": "meets",
    "overlaps": "overlapped_by",
    "overlapped_by": "overlaps",
    "starts": "started_by",
    "started_by": "starts",
    "during": "contains",
    "contains": "during",
    "finishes": "finished_by",
    "finished_by": "finishes",
    "equals": "equals",
}

DERIVED: dict[str, Relation] = {
    "in": in_,
    "follows": follows,
    "precedes": precedes,
}


def get_relation(name: str) -> Relation:
    """Look up a base or derived relation by name."""
    if name in RELATIONS:
        return RELATIONS[name]
    if name in DERIVED:
        return DERIVED[name]
    if name == "after_legacy":
        return after_legacy
    valid = ", ".join([*RELATIONS, *DERIVED, "after_legacy"])
    raise InvalidArgument(f"Unknown relation: {name!r}\nValid relations: {valid}")


def relate(first: Any, second: Any) -> str:
    """Name the base relation holding between two intervals.

    Uses canonical `after`. For proper intervals exactly one relation holds;
    for zero-length intervals the first match in table order wins.
    """
    i, j = as_interval(first), as_interval(second)
    for name, relation in RELATIONS.items():
        if relation(i, j):
            return name
    raise InvalidArgument(f"No Allen relation holds between {i} and {j}")
