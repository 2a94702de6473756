"""
Filtering of the monastery catalog by sect, region and free text.

The engine is a pure function of the catalog and the criteria: the result
preserves catalog order and an empty result is a normal outcome.
"""

from dataclasses import dataclass
from typing import Tuple
import logging

import numpy as np
import pandas as pd

from .catalog import LocationCatalog, LocationRecord, WILDCARD

logger = logging.getLogger(__name__)

FEEDBACK_TEMPLATE = "Found {count} monasteries matching your criteria."


@dataclass(frozen=True)
class FilterCriteria:
    """Filter selections taken from the UI controls."""
    category: str = WILDCARD
    region: str = WILDCARD
    search_text: str = ""

    @property
    def is_unfiltered(self) -> bool:
        return self.category == WILDCARD and self.region == WILDCARD and not self.search_text


@dataclass(frozen=True)
class FilterResult:
    """Ordered subset of the catalog matching a FilterCriteria."""
    criteria: FilterCriteria
    records: Tuple[LocationRecord, ...]

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def feedback(self) -> str:
        return format_feedback(self.count)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(record.name for record in self.records)


def format_feedback(count: int) -> str:
    """Feedback sentence shown under the filter controls."""
    return FEEDBACK_TEMPLATE.format(count=count)


def _equals_or_wildcard(column: pd.Series, value: str) -> pd.Series:
    if value == WILDCARD:
        return pd.Series(np.ones(len(column), dtype=bool), index=column.index)
    return column == value


def _text_mask(frame: pd.DataFrame, search_text: str) -> pd.Series:
    if not search_text:
        return pd.Series(np.ones(len(frame), dtype=bool), index=frame.index)

    term = search_text.lower()
    in_name = frame['name'].str.lower().str.contains(term, regex=False, na=False)
    in_region = frame['region'].str.lower().str.contains(term, regex=False, na=False)
    return in_name | in_region


def filter_locations(catalog: LocationCatalog, criteria: FilterCriteria) -> FilterResult:
    """
    Select the catalog records matching all three predicates.

    Args:
        catalog: Full location catalog
        criteria: Category, region and search text selections

    Returns:
        FilterResult with records in catalog order
    """
    frame = catalog.to_geodataframe()

    mask = (
        _equals_or_wildcard(frame['category'], criteria.category)
        & _equals_or_wildcard(frame['region'], criteria.region)
        & _text_mask(frame, criteria.search_text)
    )

    records = tuple(catalog[int(position)] for position in frame.index[mask.to_numpy()])

    logger.info(
        f"Filter sect={criteria.category!r} region={criteria.region!r} "
        f"search={criteria.search_text!r}: {len(records)} of {len(catalog)} monasteries"
    )
    return FilterResult(criteria=criteria, records=records)


def search_locations(catalog: LocationCatalog, criteria: FilterCriteria) -> FilterResult:
    """Search button handler; same predicate set as the selectors."""
    return filter_locations(catalog, criteria)
