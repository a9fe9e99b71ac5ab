"""
Tests for box and exact radius searches over the in-memory store
"""
import pytest

from core.exceptions import ValidationException
from domain.value_objects import GeoPoint
from conftest import BANGALORE, point_north_of


async def seed(store, **points):
    ids = {}
    for name, point in points.items():
        ids[name] = await store.create("jobs", {"name": name, "location": point.to_dict()})
    return ids


def names(records):
    return sorted(r["name"] for r in records)


class TestBoundingBoxSearch:
    """Test BoundingBoxSearch"""

    @pytest.mark.asyncio
    async def test_box_includes_exact_excludes_beyond_radius(self, store, search):
        """Job 12 km out: a 15 km box finds it, a 10 km exact search does not"""
        await seed(store, twelve=point_north_of(BANGALORE, 12))

        boxed = await search.find_nearby("jobs", BANGALORE, 15, limit=10)
        exact = await search.find_nearby_exact("jobs", BANGALORE, 10, limit=10)

        assert names(boxed) == ["twelve"]
        assert exact == []

    @pytest.mark.asyncio
    async def test_box_corner_false_positive(self, store, search):
        """~9 km north and ~9 km east is ~12.7 km away but inside the 10 km box"""
        corner = GeoPoint(BANGALORE.latitude + 0.0809, BANGALORE.longitude + 0.0830)
        await seed(store, corner=corner, center=BANGALORE)

        boxed = await search.find_nearby("jobs", BANGALORE, 10)
        exact = await search.find_nearby_exact("jobs", BANGALORE, 10)

        assert names(boxed) == ["center", "corner"]
        assert names(exact) == ["center"]

    @pytest.mark.asyncio
    async def test_same_latitude_band_outside_longitude_dropped(self, store, search):
        """The lexicographic range admits the whole latitude band; the box trims it"""
        await seed(store, west=GeoPoint(BANGALORE.latitude, 70.0), home=BANGALORE)

        result = await search.find_nearby("jobs", BANGALORE, 10)

        assert names(result) == ["home"]

    @pytest.mark.asyncio
    async def test_exact_results_nearest_first(self, store, search):
        await seed(
            store,
            five=point_north_of(BANGALORE, 5),
            one=point_north_of(BANGALORE, 1),
            three=point_north_of(BANGALORE, 3),
        )

        result = await search.find_nearby_exact("jobs", BANGALORE, 10)

        assert [r["name"] for r in result] == ["one", "three", "five"]

    @pytest.mark.asyncio
    async def test_limit_caps_results(self, store, search):
        await seed(store, **{f"p{i}": point_north_of(BANGALORE, i) for i in range(1, 6)})

        assert len(await search.find_nearby("jobs", BANGALORE, 10, limit=2)) == 2
        assert len(await search.find_nearby_exact("jobs", BANGALORE, 10, limit=3)) == 3

    @pytest.mark.asyncio
    async def test_records_without_location_ignored(self, store, search):
        await store.create("jobs", {"name": "nowhere"})
        await store.create("jobs", {"name": "broken", "location": {"latitude": 12.97}})
        await seed(store, home=BANGALORE)

        assert names(await search.find_nearby_exact("jobs", BANGALORE, 5)) == ["home"]

    @pytest.mark.asyncio
    async def test_invalid_radius(self, search):
        with pytest.raises(ValidationException):
            await search.find_nearby_exact("jobs", BANGALORE, 0)

    @pytest.mark.asyncio
    async def test_invalid_limit(self, search):
        with pytest.raises(ValidationException):
            await search.find_nearby("jobs", BANGALORE, 5, limit=0)
