"""
Monastery location catalog.

The catalog is a fixed, ordered sequence of point-of-interest records defined
once at start-up. Nothing in the application adds, edits or removes entries;
filtering always produces a new ordered subset.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import logging

import geopandas as gpd
from shapely.geometry import Point

logger = logging.getLogger(__name__)

WILDCARD = "all"

SECT_OPTIONS = [WILDCARD, "Kagyu", "Nyingma"]
REGION_OPTIONS = [WILDCARD, "East Sikkim", "West Sikkim", "North Sikkim", "South Sikkim"]


@dataclass(frozen=True)
class LocationRecord:
    """A single monastery on the map."""
    name: str
    lat: float
    lng: float
    category: str
    region: str

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.lat, self.lng)

    def to_dict(self) -> Dict:
        return asdict(self)


MONASTERY_LOCATIONS: Tuple[LocationRecord, ...] = (
    LocationRecord("Rumtek Monastery", 27.2753, 88.5447, "Kagyu", "East Sikkim"),
    LocationRecord("Pemayangtse Monastery", 27.3193, 88.2435, "Nyingma", "West Sikkim"),
    LocationRecord("Tashiding Monastery", 27.3060, 88.2932, "Nyingma", "West Sikkim"),
    LocationRecord("Enchey Monastery", 27.3370, 88.6143, "Nyingma", "East Sikkim"),
    LocationRecord("Phodong Monastery", 27.4208, 88.5833, "Kagyu", "North Sikkim"),
    LocationRecord("Sanga Choeling Monastery", 27.3069, 88.2415, "Nyingma", "West Sikkim"),
    LocationRecord("Dubdi Monastery", 27.3592, 88.3533, "Nyingma", "West Sikkim"),
    LocationRecord("Lingdum Monastery (Ranka)", 27.3005, 88.5710, "Kagyu", "East Sikkim"),
    LocationRecord("Do Drul Chorten", 27.3277, 88.6186, "Nyingma", "East Sikkim"),
)


class LocationCatalog:
    """Immutable ordered collection of LocationRecord."""

    def __init__(self, records: Sequence[LocationRecord] = MONASTERY_LOCATIONS):
        self._records = tuple(records)
        self._frame = None

    @property
    def records(self) -> Tuple[LocationRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[LocationRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> LocationRecord:
        return self._records[index]

    def find(self, name: str) -> Optional[LocationRecord]:
        """Look up a record by its display name (first match wins)."""
        for record in self._records:
            if record.name == name:
                return record
        logger.warning(f"No monastery named '{name}' in catalog")
        return None

    def categories(self) -> List[str]:
        """Distinct categories in catalog order."""
        return list(dict.fromkeys(record.category for record in self._records))

    def regions(self) -> List[str]:
        """Distinct regions in catalog order."""
        return list(dict.fromkeys(record.region for record in self._records))

    def to_geodataframe(self) -> gpd.GeoDataFrame:
        """
        Catalog as a GeoDataFrame in WGS84.

        The row index is the position in the catalog, so boolean masks over
        the frame map straight back onto ``records``.
        """
        if self._frame is None:
            data = {
                'name': [r.name for r in self._records],
                'category': [r.category for r in self._records],
                'region': [r.region for r in self._records],
                'geometry': [Point(r.lng, r.lat) for r in self._records]
            }
            self._frame = gpd.GeoDataFrame(data, geometry='geometry', crs="EPSG:4326")
        return self._frame.copy()

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Check coordinate ranges and name uniqueness.

        Returns:
            Tuple of (is_valid, list of issues)
        """
        issues = []
        seen = set()
        for record in self._records:
            if not -90.0 <= record.lat <= 90.0 or not -180.0 <= record.lng <= 180.0:
                issues.append(f"{record.name}: coordinates out of range ({record.lat}, {record.lng})")
            if record.name in seen:
                issues.append(f"{record.name}: duplicate name")
            seen.add(record.name)

        for issue in issues:
            logger.warning(f"Catalog issue: {issue}")
        return len(issues) == 0, issues
