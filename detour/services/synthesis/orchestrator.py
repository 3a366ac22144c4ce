"""
Alternative route synthesis - top-level coordination

Architecture: Intersection extraction -> Concurrent detour fetch -> Validation
-> (optional) Stitching -> Congestion annotation -> Result assembly
"""
import asyncio
import logging
from typing import List, Optional

from detour.config import SynthesisConfig
from detour.models.geo import Geopoint
from detour.models.route import ResultSet, Route
from detour.services.routing.backend import RoutingBackend
from detour.services.synthesis.congestion import CongestionAnnotator
from detour.services.synthesis.fetcher import fetch_alternatives
from detour.services.synthesis.geometry import decode_polyline, encode_polyline
from detour.services.synthesis.intersections import extract_intersections, has_cycle

logger = logging.getLogger(__name__)

# Leg 0 approaches the intersection, leg 1 is the detour through the via-point
DETOUR_LEG_INDEX = 1


def strip_alternative_route(route: Route) -> Route:
    """Return a copy whose overview geometry covers only the first two steps of leg 0.

    The two steps' decoded geometries are concatenated as they are. A route
    whose first leg has fewer than two steps is returned unstripped. Legs are
    left untouched so the detour leg can still be annotated.
    """
    stripped = route.model_copy(deep=True)
    if not stripped.legs or len(stripped.legs[0].steps) < 2:
        return stripped

    first, second = stripped.legs[0].steps[:2]
    stripped.geometry = encode_polyline(
        decode_polyline(first.geometry) + decode_polyline(second.geometry)
    )
    return stripped


class AlternativeRouteSynthesizer:
    """
    Builds detour alternatives around a primary route.

    Selection policy: per intersection the first candidate in via-point order
    is considered, regardless of which backend call finished first. There is
    no cost-based ranking.
    """

    def __init__(
        self,
        backend: RoutingBackend,
        config: SynthesisConfig,
        annotator: Optional[CongestionAnnotator] = None,
    ):
        self.backend = backend
        self.config = config
        self.annotator = annotator or CongestionAnnotator(levels=config.congestion_levels)

    async def synthesize(self, primary_route: Route, destination: Geopoint) -> ResultSet:
        """Main synthesis process"""
        # Step 1: Intersections along the primary route
        intersections = extract_intersections(
            primary_route, limit=self.config.max_intersections
        )
        logger.info("Synthesizing alternatives at %d intersections", len(intersections))

        # Step 2: One concurrent batch per intersection, single join over all
        batches = await asyncio.gather(
            *(
                fetch_alternatives(intersection, destination, self.backend, self.config)
                for intersection in intersections
            )
        )

        # Step 3-6: Select, validate, stitch and annotate
        alternatives: List[Route] = []
        for position, candidates in enumerate(batches):
            accepted = self._accept(position, candidates)
            if accepted is not None:
                alternatives.append(accepted)

        logger.info(
            "Accepted %d of %d intersections as alternatives",
            len(alternatives),
            len(intersections),
        )
        return ResultSet(primary=primary_route, alternatives=alternatives)

    def _accept(self, position: int, candidates: List[Route]) -> Optional[Route]:
        if not candidates:
            return None

        candidate = candidates[0]

        if len(candidate.legs) < 2:
            logger.debug("Intersection %d: candidate has no detour leg", position)
            return None

        if has_cycle(candidate):
            logger.warning("Intersection %d: candidate revisits a location, rejected", position)
            return None

        if self.config.strip_alternative:
            candidate = strip_alternative_route(candidate)

        return self.annotator.annotate(candidate, DETOUR_LEG_INDEX)
