import pytest

from shared.geo import GeoPoint, distance_between, haversine_km


def test_same_point_is_zero():
    point = GeoPoint(lat=28.6139, lng=77.2090)
    assert haversine_km(point, point) == 0.0


def test_one_degree_along_equator():
    assert haversine_km(GeoPoint(0, 0), GeoPoint(0, 1)) == pytest.approx(111.19, abs=0.01)


def test_distance_is_symmetric():
    delhi = GeoPoint(lat=28.6139, lng=77.2090)
    mumbai = GeoPoint(lat=19.0760, lng=72.8777)
    assert haversine_km(delhi, mumbai) == pytest.approx(haversine_km(mumbai, delhi))
    assert haversine_km(delhi, mumbai) == pytest.approx(1150, rel=0.02)


def test_unknown_side_gives_none():
    point = GeoPoint(lat=1, lng=1)
    assert distance_between(point, None) is None
    assert distance_between(None, point) is None


@pytest.mark.parametrize("lat, lng", [(91, 0), (-91, 0), (0, 181), (0, -180.5)])
def test_out_of_range_coordinates(lat, lng):
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lng=lng)
