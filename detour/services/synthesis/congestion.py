"""
Synthetic congestion labels for detour legs.

The values are illustrative only; nothing here is measured traffic.
"""
import random
from typing import Optional, Sequence

from detour.errors import InvalidLegIndex
from detour.models.route import CongestionAnnotation, CongestionLevel, Route
from detour.services.synthesis.geometry import leg_coordinates

DEFAULT_LEVELS = (CongestionLevel.HEAVY, CongestionLevel.MODERATE)


class CongestionAnnotator:
    """Attach a congestion annotation to one leg of a route

    Args:
        rng: Randomness source; pass a seeded random.Random for repeatable output
        levels: Labels to choose from
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        levels: Optional[Sequence[CongestionLevel]] = None,
    ):
        self.rng = rng or random.Random()
        if levels is None:
            levels = DEFAULT_LEVELS
        if not levels:
            raise ValueError("At least one congestion level is required")
        self.levels = [CongestionLevel(level) for level in levels]

    def annotate(self, route: Route, leg_index: int) -> Route:
        """Return a copy of `route` with leg `leg_index` annotated, one label per segment"""
        if not 0 <= leg_index < len(route.legs):
            raise InvalidLegIndex(leg_index, len(route.legs))

        annotated = route.model_copy(deep=True)
        leg = annotated.legs[leg_index]

        segment_count = max(len(leg_coordinates(leg)) - 1, 0)
        level = self.rng.choice(self.levels)
        leg.annotation = CongestionAnnotation(congestion=[level] * segment_count)
        return annotated
