"""Batch fitting orchestration.

This module fits a sequence of point sets one after another, collecting
per-curve results and batch statistics. A failing point set is logged and
recorded; it does not stop the rest of the batch.

Key components:
- CurveResult: Outcome of fitting one point set
- CurveProcessor: Main orchestrator class for batch fitting
"""

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from curveforge.config import CurveForgeSettings
from curveforge.core.hobby import HobbyFitter
from curveforge.core.intersections import SelfIntersection, self_intersections
from curveforge.domain import Contour
from curveforge.exceptions import CurveForgeError
from curveforge.io import PointSet
from curveforge.utils import FitLogger, FitStats, configure_logging


@dataclass(frozen=True)
class CurveResult:
    """Outcome of fitting one point set.

    Attributes:
        name: Point set name
        contour: Fitted contour, or None when fitting failed
        length: Arc length of the contour (0.0 on failure)
        self_intersections: Crossings found, when requested
        error: Error message when fitting failed
        duration_ms: Time spent on this point set
    """

    name: str
    contour: Contour | None
    length: float = 0.0
    self_intersections: tuple[SelfIntersection, ...] = ()
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.contour is not None


class CurveProcessor:
    """Fits batches of point sets with shared settings.

    Example:
        processor = CurveProcessor(get_default_settings())
        results, stats = processor.process(PointReader(path).read())
    """

    def __init__(self, config: CurveForgeSettings, quiet: bool = False) -> None:
        """Initialize curve processor with configuration.

        Args:
            config: Library settings containing fitting and logging config
            quiet: Suppress console log output except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.fit_logger = FitLogger(self.logger)

    def fit_one(self, point_set: PointSet, find_intersections: bool = False) -> CurveResult:
        """Fit a single point set, converting library errors into a failed result."""
        start = time.perf_counter()
        self.fit_logger.log_fit_start(point_set.name, len(point_set.points))

        try:
            fitter = HobbyFitter(tension=point_set.tension, settings=self.config)
            contour = fitter.fit(point_set.points, closed=point_set.closed)
            length = contour.length()
            crossings = tuple(self_intersections(contour, self.config)) if find_intersections else ()
        except CurveForgeError as e:
            duration_ms = (time.perf_counter() - start) * 1000
            self.fit_logger.log_fit_error(point_set.name, e)
            return CurveResult(
                name=point_set.name, contour=None, error=str(e), duration_ms=duration_ms
            )

        duration_ms = (time.perf_counter() - start) * 1000
        self.fit_logger.log_fit_complete(
            point_set.name, contour.segment_count, length, duration_ms
        )
        if find_intersections:
            self.fit_logger.log_intersections(point_set.name, len(crossings))

        return CurveResult(
            name=point_set.name,
            contour=contour,
            length=length,
            self_intersections=crossings,
            duration_ms=duration_ms,
        )

    def process(
        self,
        point_sets: Iterable[PointSet],
        find_intersections: bool = False,
        progress_callback: Callable[[int, str, bool], None] | None = None,
    ) -> tuple[list[CurveResult], FitStats]:
        """Fit every point set in order.

        Args:
            point_sets: Point sets to fit
            find_intersections: Also compute self-intersections per curve
            progress_callback: Optional callback(completed, name, success)

        Returns:
            Tuple of (results in input order, batch statistics)
        """
        stats = self.fit_logger.stats
        stats.start_time = time.time()
        self.logger.info("Starting batch fit", find_intersections=find_intersections)

        results: list[CurveResult] = []
        for point_set in point_sets:
            result = self.fit_one(point_set, find_intersections)
            results.append(result)
            if progress_callback is not None:
                progress_callback(len(results), point_set.name, result.ok)

        stats.end_time = time.time()
        self.logger.info(
            "Batch fit complete",
            fitted=stats.fitted_count,
            errors=stats.error_count,
            duration_s=round(stats.duration_seconds, 3),
        )
        return results, stats
