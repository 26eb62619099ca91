"""
Query engine - $filter, $select, $skip and $top over aggregated records.

Stages run in a fixed order: filter, then projection, then paging.
The reported count is the size of the collection before any stage runs.
Unsupported filter expressions do not fail the query; they leave the
collection unfiltered.
"""

import logging
from abc import ABC, abstractmethod
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

from app.schemas.odata.envelope import ELEMENTS_CONTEXT
from app.services.flattener import Record

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> int | None:
    """
    Parse a query parameter leniently.

    Accepts ints and strings with a leading integer ("10", " 5", "7abc").
    Anything else yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(1))
    return None


# ===================
# Filter predicates
# ===================

@dataclass(frozen=True)
class FilterPredicate(ABC):
    """A parsed filter: one field compared against one literal."""

    pattern: ClassVar[re.Pattern[str]]

    field: str
    value: str

    @classmethod
    def parse(cls, expression: str) -> "FilterPredicate | None":
        match = cls.pattern.search(expression)
        if match is None:
            return None
        return cls(field=match.group(1), value=match.group(2))

    @abstractmethod
    def matches(self, record: Record) -> bool:
        """Whether a record satisfies the predicate."""
        pass

    def apply(self, records: Sequence[Record]) -> list[Record]:
        return [record for record in records if self.matches(record)]


class EqualsPredicate(FilterPredicate):
    """<field> eq '<value>' - exact, case-sensitive."""

    pattern = re.compile(r"(\w+)\s+eq\s+'([^']+)'")

    def matches(self, record: Record) -> bool:
        return record.get(self.field) == self.value


class ContainsPredicate(FilterPredicate):
    """contains(<field>, '<value>') - case-insensitive substring."""

    pattern = re.compile(r"contains\((\w+),\s*'([^']+)'\)")

    def matches(self, record: Record) -> bool:
        candidate = record.get(self.field)
        if candidate is None or candidate == "":
            return False
        return self.value.lower() in str(candidate).lower()


class StartsWithPredicate(FilterPredicate):
    """startswith(<field>, '<value>') - case-insensitive prefix."""

    pattern = re.compile(r"startswith\((\w+),\s*'([^']+)'\)")

    def matches(self, record: Record) -> bool:
        candidate = record.get(self.field)
        if candidate is None or candidate == "":
            return False
        return str(candidate).lower().startswith(self.value.lower())


# First syntactic match wins
PREDICATE_TYPES: tuple[type[FilterPredicate], ...] = (
    EqualsPredicate,
    ContainsPredicate,
    StartsWithPredicate,
)


def parse_filter(expression: str | None) -> FilterPredicate | None:
    """
    Parse a $filter expression into a predicate.

    Returns:
        The first predicate form that matches, or None when the
        expression is empty or not supported
    """
    if not expression:
        return None
    for predicate_type in PREDICATE_TYPES:
        predicate = predicate_type.parse(expression)
        if predicate is not None:
            return predicate
    logger.info(f"Unsupported $filter expression, returning unfiltered: {expression!r}")
    return None


# ===================
# Options and result
# ===================

@dataclass(frozen=True)
class QueryOptions:
    """Per-request query options."""

    filter_expression: str | None = None
    select_fields: list[str] | None = None
    skip: int = 0
    limit: int | None = None

    @classmethod
    def from_params(
        cls,
        filter: str | None = None,
        select: str | None = None,
        top: Any = None,
        skip: Any = None,
    ) -> "QueryOptions":
        """
        Build options from raw $filter/$select/$top/$skip values.

        A negative or unparseable skip becomes 0; a non-positive or
        unparseable top means no limit.
        """
        select_fields = None
        if select:
            select_fields = [name.strip() for name in select.split(",") if name.strip()]

        parsed_skip = parse_int(skip)
        parsed_top = parse_int(top)

        return cls(
            filter_expression=filter or None,
            select_fields=select_fields,
            skip=parsed_skip if parsed_skip and parsed_skip > 0 else 0,
            limit=parsed_top if parsed_top and parsed_top > 0 else None,
        )


@dataclass(frozen=True)
class ResultEnvelope:
    """Query result: pre-query collection size plus the resulting records."""

    total_count: int
    value: list[Record] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "@odata.context": ELEMENTS_CONTEXT,
            "@odata.count": self.total_count,
            "value": self.value,
        }


# ===================
# Stages
# ===================

def apply_filter(records: Sequence[Record], expression: str | None) -> list[Record]:
    predicate = parse_filter(expression)
    if predicate is None:
        return list(records)
    return predicate.apply(records)


def apply_select(records: Sequence[Record], select_fields: list[str] | None) -> list[Record]:
    """Keep only the requested fields that exist on each record."""
    if not select_fields:
        return list(records)
    return [
        {name: record[name] for name in select_fields if name in record}
        for record in records
    ]


def apply_paging(records: Sequence[Record], skip: int, limit: int | None) -> list[Record]:
    page = list(records)
    if skip > 0:
        page = page[skip:]
    if limit is not None and limit > 0:
        page = page[:limit]
    return page


def execute_query(records: Sequence[Record], options: QueryOptions) -> ResultEnvelope:
    """
    Run a query over an aggregated collection.

    Args:
        records: Aggregated records
        options: Parsed query options

    Returns:
        ResultEnvelope whose total_count is len(records)
    """
    total_count = len(records)

    result = apply_filter(records, options.filter_expression)
    result = apply_select(result, options.select_fields)
    result = apply_paging(result, options.skip, options.limit)

    return ResultEnvelope(total_count=total_count, value=result)
