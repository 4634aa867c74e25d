from __future__ import annotations

import math

import pytest

from src.geofence_attendance.geofence_attendance.locations.geofence import distance_meters, resolve_office
from src.geofence_attendance.geofence_attendance.locations.model import GeoPoint, Location

EARTH_RADIUS_M = 6371000.0


def north_of(lat: float, lon: float, meters: float) -> GeoPoint:
    return GeoPoint(lat + math.degrees(meters / EARTH_RADIUS_M), lon)


def test_distance_is_zero_at_center():
    p = GeoPoint(9.4, -0.85)
    assert distance_meters(p, p) == 0.0


def test_distance_along_meridian_matches_arc_length():
    a = GeoPoint(9.4, -0.85)
    b = north_of(9.4, -0.85, 500)
    assert distance_meters(a, b) == pytest.approx(500, abs=1e-6)


def test_distance_is_symmetric():
    a = GeoPoint(5.6037, -0.1870)
    b = GeoPoint(9.4034, -0.8424)
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))
    # Accra to Tamale is roughly 420 km
    assert 400_000 < distance_meters(a, b) < 440_000


def test_point_on_boundary_is_inside():
    center = GeoPoint(9.4, -0.85)
    edge = north_of(9.4, -0.85, 150)
    radius = distance_meters(edge, center)
    office = Location(name="HQ", latitude=9.4, longitude=-0.85, radius_meters=radius)

    assert resolve_office(edge, [office]) == "HQ"


def test_point_one_meter_past_boundary_is_outside():
    office = Location(name="HQ", latitude=9.4, longitude=-0.85, radius_meters=150)
    outside = north_of(9.4, -0.85, 151)

    assert resolve_office(outside, [office]) is None


def test_overlapping_geofences_resolve_to_first_listed():
    point = GeoPoint(9.4, -0.85)
    annex = Location(name="Annex", latitude=9.4005, longitude=-0.85, radius_meters=200)
    hq = Location(name="HQ", latitude=9.4, longitude=-0.85, radius_meters=150)

    assert resolve_office(point, [annex, hq]) == "Annex"
    assert resolve_office(point, [hq, annex]) == "HQ"


def test_center_of_hq_resolves_hq(hq):
    assert resolve_office(GeoPoint(9.400, -0.850), [hq]) == "HQ"


def test_point_500m_away_resolves_nothing(hq):
    assert resolve_office(north_of(9.4, -0.85, 500), [hq]) is None


def test_no_locations_resolves_nothing():
    assert resolve_office(GeoPoint(0, 0), []) is None


def test_location_requires_positive_radius():
    with pytest.raises(ValueError):
        Location(name="Bad", latitude=0, longitude=0, radius_meters=0)


def test_default_radius_is_150m():
    assert Location(name="X", latitude=0, longitude=0).radius_meters == 150
