"""
Catalog sources for gearmotor selection.

A source serves performance rows and component part numbers. Fetching
is async so a database or HTTP backed source can be dropped in; the
selection and BOM logic itself stays pure (see selector and bom).
"""

import logging
from typing import Optional, Protocol

from conveyorcalc.gearmotor.bom import DEFAULT_MOUNTING_VARIANT, resolve_bom
from conveyorcalc.gearmotor.loader import load_catalog
from conveyorcalc.gearmotor.models import (
    BomResolution,
    ComponentMap,
    GearmotorCatalog,
    GearmotorSelectionInputs,
    GearmotorSelectionResult,
    GearmotorSeries,
    OutputShaftOption,
    PerformancePoint,
    SERIES_ORDER,
)
from conveyorcalc.gearmotor.selector import input_error, select_from_series, speed_bounds
from conveyorcalc.models.inputs import GearmotorMountingStyle

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    async def fetch_performance_points(
        self,
        series: GearmotorSeries,
        min_rpm: float,
        max_rpm: float,
    ) -> list[PerformancePoint]:
        ...

    async def fetch_components(self) -> ComponentMap:
        ...


class JsonCatalogSource:
    """Catalog source backed by a JSON file (the packaged catalog by default)."""

    def __init__(self, path: Optional[str] = None, catalog: Optional[GearmotorCatalog] = None):
        self._path = path
        self._catalog = catalog

    @property
    def catalog(self) -> GearmotorCatalog:
        if self._catalog is None:
            self._catalog = load_catalog(self._path)
        return self._catalog

    async def fetch_performance_points(
        self,
        series: GearmotorSeries,
        min_rpm: float,
        max_rpm: float,
    ) -> list[PerformancePoint]:
        return self.catalog.points_for_series(series, min_rpm, max_rpm)

    async def fetch_components(self) -> ComponentMap:
        return self.catalog.components


async def select_gearmotor_from_source(
    source: CatalogSource,
    inputs: GearmotorSelectionInputs,
) -> GearmotorSelectionResult:
    """
    Fetch rows series by series and select.

    MINICASE rows are only fetched when no FLEXBLOC row passes.
    """
    min_rpm, max_rpm = speed_bounds(inputs)
    points_by_series: dict[GearmotorSeries, list[PerformancePoint]] = {}

    result: Optional[GearmotorSelectionResult] = None
    for series in SERIES_ORDER:
        points_by_series[series] = await source.fetch_performance_points(series, min_rpm, max_rpm)
        logger.debug("Fetched %d %s rows", len(points_by_series[series]), series.value)
        result = select_from_series(points_by_series, inputs)
        if result.candidates or input_error(inputs):
            return result

    return result


async def resolve_bom_from_source(
    source: CatalogSource,
    point: PerformancePoint,
    mounting_style=GearmotorMountingStyle.SHAFT_MOUNTED,
    output_shaft_option: Optional[OutputShaftOption] = None,
    mounting_variant: str = DEFAULT_MOUNTING_VARIANT,
) -> BomResolution:
    components = await source.fetch_components()
    return resolve_bom(
        point,
        components,
        mounting_style=mounting_style,
        output_shaft_option=output_shaft_option,
        mounting_variant=mounting_variant,
    )
