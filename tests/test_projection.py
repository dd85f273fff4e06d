import math
import os
import sys

import pytest

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from photoloc.core.config import ProjectionConfig
from photoloc.core.exceptions import InvalidCoordinate
from photoloc.services.projection import Projector, ReferencePolicy, centroid

PARIS = (48.8566, 2.3522)
LONDON = (51.5074, -0.1278)
BERLIN = (52.5200, 13.4050)


@pytest.fixture
def projector():
    return Projector(ProjectionConfig(reference_policy="centroid", crs=None))


def test_empty_batch(projector):
    assert projector.project([]) == []


def test_one_result_per_input_in_order(projector):
    points = projector.project([PARIS, LONDON, BERLIN])

    assert len(points) == 3
    # London is west of Paris, Berlin east
    assert points[1].x < points[0].x < points[2].x
    assert all(p.distance >= 0 for p in points)


def test_first_policy_reference_has_zero_distance(projector):
    points = projector.project([PARIS, LONDON], policy=ReferencePolicy.FIRST)

    assert points[0].distance == pytest.approx(0.0, abs=1e-6)
    assert points[0].x == pytest.approx(0.0, abs=1e-6)
    assert points[0].y == pytest.approx(0.0, abs=1e-6)
    assert points[1].distance > 300_000


def test_aeqd_distance_matches_geodesic_distance(projector):
    points = projector.project([LONDON, BERLIN], policy=ReferencePolicy.ORIGIN, origin=PARIS)

    assert points[0].distance == pytest.approx(projector.geodesic_distance(PARIS, LONDON), rel=1e-6)
    assert points[1].distance == pytest.approx(projector.geodesic_distance(PARIS, BERLIN), rel=1e-6)


def test_distance_is_consistent_with_planar_coordinates(projector):
    points = projector.project([PARIS, LONDON, BERLIN], policy=ReferencePolicy.ORIGIN, origin=PARIS)

    # Paris is the origin, so its projected position is the reference
    ref = points[0]
    for p in points:
        assert p.distance == pytest.approx(math.hypot(p.x - ref.x, p.y - ref.y), abs=1e-6)


def test_policy_can_be_given_by_name(projector):
    by_name = projector.project([PARIS, LONDON], policy="first")
    by_enum = projector.project([PARIS, LONDON], policy=ReferencePolicy.FIRST)
    assert by_name == by_enum


def test_default_policy_comes_from_config():
    projector = Projector(ProjectionConfig(reference_policy="first", crs=None))
    points = projector.project([PARIS, LONDON])
    assert points[0].distance == pytest.approx(0.0, abs=1e-6)


def test_nearest_policy_uses_closest_other_point(projector):
    near_a = (48.8566, 2.3522)
    near_b = (48.8575, 2.3522)  # ~100 m north
    far = BERLIN

    points = projector.project([near_a, near_b, far], policy=ReferencePolicy.NEAREST)

    assert points[0].distance == pytest.approx(points[1].distance)
    assert 90 < points[0].distance < 110
    assert points[2].distance > 800_000


def test_nearest_policy_single_point_and_duplicates(projector):
    assert projector.project([PARIS], policy=ReferencePolicy.NEAREST)[0].distance == 0.0

    points = projector.project([PARIS, PARIS], policy=ReferencePolicy.NEAREST)
    assert [p.distance for p in points] == [0.0, 0.0]


def test_origin_policy_requires_origin(projector):
    with pytest.raises(ValueError):
        projector.project([PARIS], policy=ReferencePolicy.ORIGIN)


def test_origin_is_validated(projector):
    with pytest.raises(InvalidCoordinate):
        projector.project([PARIS], policy=ReferencePolicy.ORIGIN, origin=(95.0, 0.0))


def test_out_of_range_coordinate_fails(projector):
    with pytest.raises(InvalidCoordinate):
        projector.project([PARIS, (10.0, 200.0)])


def test_unknown_policy_name(projector):
    with pytest.raises(ValueError):
        projector.project([PARIS], policy="somewhere")


def test_fixed_crs_keeps_one_projection_for_the_batch():
    projector = Projector(ProjectionConfig(reference_policy="first", crs="EPSG:3857"))
    points = projector.project([(0.0, 0.0), (0.0, 1.0)])

    assert points[0].x == pytest.approx(0.0, abs=1e-6)
    assert points[0].distance == pytest.approx(0.0, abs=1e-6)
    # Web Mercator: one degree of longitude at the equator
    assert points[1].x == pytest.approx(111319.49, rel=1e-6)
    assert points[1].distance == pytest.approx(points[1].x, rel=1e-9)


def test_centroid_across_antimeridian():
    lat, lon = centroid([(10.0, 179.0), (20.0, -179.0)])
    assert lat == pytest.approx(15.0)
    assert abs(lon) == pytest.approx(180.0)
