"""Unit tests for the congestion annotator."""

import random

import pytest

from route_builders import intersection, leg, route, step

from detour.errors import InvalidLegIndex
from detour.models.route import CongestionLevel, Route
from detour.services.synthesis.congestion import CongestionAnnotator
from detour.services.synthesis.geometry import leg_coordinates


def _two_leg_route() -> Route:
    return Route.model_validate(
        route(
            leg(step([(13.40, 52.50), (13.41, 52.50)])),
            leg(
                step([(13.41, 52.50), (13.41, 52.51), (13.42, 52.51)], [intersection((13.41, 52.50))]),
                step([(13.42, 52.51), (13.43, 52.51)], [intersection((13.42, 52.51))]),
            ),
        )
    )


@pytest.mark.parametrize("leg_index", [0, 1])
def test_annotation_has_one_label_per_segment(leg_index):
    annotator = CongestionAnnotator(rng=random.Random(7))
    original = _two_leg_route()

    annotated = annotator.annotate(original, leg_index)

    congestion = annotated.legs[leg_index].annotation.congestion
    assert len(congestion) == len(leg_coordinates(original.legs[leg_index])) - 1
    assert len(set(congestion)) == 1
    assert congestion[0] in (CongestionLevel.HEAVY, CongestionLevel.MODERATE)


def test_annotate_returns_copy():
    original = _two_leg_route()

    annotated = CongestionAnnotator(rng=random.Random(7)).annotate(original, 1)

    assert original.legs[1].annotation is None
    assert annotated.legs[0].annotation is None
    assert annotated.legs[1].annotation is not None


def test_seeded_annotators_agree():
    labels = []
    for _ in range(2):
        annotator = CongestionAnnotator(rng=random.Random(1234))
        labels.append(
            [annotator.annotate(_two_leg_route(), 1).legs[1].annotation.congestion[0] for _ in range(10)]
        )

    assert labels[0] == labels[1]


def test_custom_levels_restrict_labels():
    annotator = CongestionAnnotator(rng=random.Random(3), levels=["light"])

    annotated = annotator.annotate(_two_leg_route(), 1)

    assert set(annotated.legs[1].annotation.congestion) == {CongestionLevel.LIGHT}


def test_leg_without_geometry_gets_empty_annotation():
    bare = Route.model_validate({"legs": [{"steps": []}]})

    annotated = CongestionAnnotator(rng=random.Random(0)).annotate(bare, 0)

    assert annotated.legs[0].annotation.congestion == []


def test_empty_level_pool_is_rejected():
    with pytest.raises(ValueError):
        CongestionAnnotator(levels=[])


@pytest.mark.parametrize("leg_index", [2, 5, -1])
def test_out_of_range_leg_index_raises(leg_index):
    with pytest.raises(InvalidLegIndex):
        CongestionAnnotator().annotate(_two_leg_route(), leg_index)


def test_annotation_serializes_in_directions_shape():
    annotated = CongestionAnnotator(rng=random.Random(0), levels=["heavy"]).annotate(
        _two_leg_route(), 1
    )

    wire = annotated.to_wire()

    assert wire["legs"][1]["annotation"] == {"congestion": ["heavy"] * 3}
    assert "annotation" not in wire["legs"][0]
    assert wire["legs"][1]["steps"][0]["intersections"][0]["in"] == 2
    assert wire["legs"][1]["steps"][0]["intersections"][0]["location"] == [13.41, 52.5]
