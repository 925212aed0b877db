import math

import pytest

from fides.models.domain import ADDRESS_NOT_AVAILABLE, Coordinate
from fides.services.churches.cache import SearchCache, cache_key
from fides.services.churches.enrichment import AddressEnricher
from fides.services.churches.errors import PermissionDenied, SearchError
from fides.services.churches.geolocation import ReportedPositionLocator, StaticGeoLocator
from fides.services.churches.service import SearchOrchestrator, SearchState

SAO_PAULO = Coordinate(-23.5505, -46.6333)


def _church(node_id: int, meters_north: float, name: str | None = None, **tags) -> dict:
    lat = SAO_PAULO.latitude + math.degrees(meters_north / 6_371_000)
    return {
        "type": "node",
        "id": node_id,
        "lat": lat,
        "lon": SAO_PAULO.longitude,
        "tags": {"amenity": "place_of_worship", "name": name or f"Igreja {node_id}", **tags},
    }


class TieredOverpass:
    """Returns one canned response per tier, in cascade order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.queries: list[str] = []

    def fetch(self, query: str) -> list[dict]:
        self.queries.append(query)
        response = self.responses[len(self.queries) - 1]
        if isinstance(response, Exception):
            raise response
        return response


class DummyGeocoder:
    def __init__(self):
        self.calls = 0

    def reverse(self, coordinate: Coordinate) -> str:
        self.calls += 1
        return "Praça da Sé, Sé, São Paulo"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _orchestrator(overpass, geocoder=None, clock=None, locator=None) -> SearchOrchestrator:
    enricher = AddressEnricher(geocoder or DummyGeocoder(), sleep=lambda _: None)
    cache = SearchCache(ttl_seconds=30 * 60, clock=clock or FakeClock())
    return SearchOrchestrator(overpass=overpass, enricher=enricher, cache=cache, locator=locator)


def test_sao_paulo_single_catholic_node():
    overpass = TieredOverpass([_church(1, 1200, "Paróquia Nossa Senhora", denomination="catholic")])
    orchestrator = _orchestrator(overpass)

    places = orchestrator.search(SAO_PAULO, 5000)

    assert len(places) == 1
    assert places[0].distance_meters == pytest.approx(1200, abs=0.5)
    assert places[0].distance_formatted == "1.2 km"
    assert len(overpass.queries) == 1
    assert '["denomination"="catholic"]' in overpass.queries[0]
    assert orchestrator.state is SearchState.DONE


def test_falls_through_empty_tier_and_stops():
    overpass = TieredOverpass([], [_church(1, 300), _church(2, 100)], AssertionError("tier 3"), AssertionError("tier 4"))
    orchestrator = _orchestrator(overpass)

    outcome = orchestrator.search_detailed(SAO_PAULO, 5000)

    assert outcome.tier.value == "christian"
    assert [place.id for place in outcome.places] == ["osm-node-2", "osm-node-1"]
    assert len(overpass.queries) == 2


def test_all_tiers_empty_returns_empty_list():
    overpass = TieredOverpass([], [], [], [])
    orchestrator = _orchestrator(overpass)

    assert orchestrator.search(SAO_PAULO, 5000) == []
    assert len(overpass.queries) == 4
    assert '"name"~' in overpass.queries[3]


def test_tier_error_aborts_without_fallback():
    overpass = TieredOverpass(SearchError("HTTP 504"), [_church(1, 100)])
    orchestrator = _orchestrator(overpass)

    with pytest.raises(SearchError):
        orchestrator.search(SAO_PAULO, 5000)

    assert len(overpass.queries) == 1
    assert orchestrator.state is SearchState.FAILED
    assert len(orchestrator.cache) == 0


def test_second_search_within_ttl_hits_cache():
    clock = FakeClock()
    overpass = TieredOverpass([_church(1, 500)], [_church(1, 500)])
    orchestrator = _orchestrator(overpass, clock=clock)

    first = orchestrator.search(SAO_PAULO, 5000)
    clock.now += 29 * 60
    second = orchestrator.search_detailed(Coordinate(-23.55051, -46.63334), 5000)

    assert len(overpass.queries) == 1
    assert second.from_cache is True
    assert second.places == first


def test_expired_cache_entry_is_refetched():
    clock = FakeClock()
    overpass = TieredOverpass([_church(1, 500)], [_church(1, 500)])
    orchestrator = _orchestrator(overpass, clock=clock)

    orchestrator.search(SAO_PAULO, 5000)
    clock.now += 30 * 60
    outcome = orchestrator.search_detailed(SAO_PAULO, 5000)

    assert len(overpass.queries) == 2
    assert outcome.from_cache is False


def test_different_radius_is_a_different_bucket():
    overpass = TieredOverpass([_church(1, 500)], [_church(1, 500)])
    orchestrator = _orchestrator(overpass)

    orchestrator.search(SAO_PAULO, 5000)
    orchestrator.search(SAO_PAULO, 10000)

    assert len(overpass.queries) == 2
    assert cache_key(SAO_PAULO, 5000) == "-23.5505,-46.6333,5000"


def test_enrichment_only_for_nearest_ten():
    geocoder = DummyGeocoder()
    overpass = TieredOverpass([_church(i, 100 * i) for i in range(1, 16)])
    orchestrator = _orchestrator(overpass, geocoder=geocoder)

    places = orchestrator.search(SAO_PAULO, 5000)

    assert len(places) == 15
    assert geocoder.calls == 10
    assert all(place.address != ADDRESS_NOT_AVAILABLE for place in places[:10])
    assert all(place.address == ADDRESS_NOT_AVAILABLE for place in places[10:])


def test_uses_locator_when_no_coordinate_given():
    overpass = TieredOverpass([_church(1, 100)])
    orchestrator = _orchestrator(overpass, locator=StaticGeoLocator(SAO_PAULO))

    outcome = orchestrator.search_detailed(radius_m=5000)

    assert outcome.coordinate == SAO_PAULO
    assert "(around:5000,-23.5505,-46.6333)" in overpass.queries[0]


def test_location_error_propagates():
    orchestrator = _orchestrator(TieredOverpass())

    with pytest.raises(PermissionDenied):
        orchestrator.search(locator=ReportedPositionLocator(error_code=1))

    assert orchestrator.state is SearchState.FAILED


def test_radius_limits_are_validated():
    orchestrator = _orchestrator(TieredOverpass())

    with pytest.raises(ValueError):
        orchestrator.search(SAO_PAULO, 0)
    with pytest.raises(ValueError):
        orchestrator.search(SAO_PAULO, orchestrator.max_radius_m + 1)


def test_clear_cache_forces_refetch():
    overpass = TieredOverpass([_church(1, 500)], [_church(1, 500)])
    orchestrator = _orchestrator(overpass)

    orchestrator.search(SAO_PAULO, 5000)
    orchestrator.clear_cache()
    orchestrator.search(SAO_PAULO, 5000)

    assert len(overpass.queries) == 2


def test_orchestrators_do_not_share_caches():
    first = _orchestrator(TieredOverpass([_church(1, 500)]))
    second_overpass = TieredOverpass([_church(1, 500)])
    second = _orchestrator(second_overpass)

    first.search(SAO_PAULO, 5000)
    second.search(SAO_PAULO, 5000)

    assert len(second_overpass.queries) == 1


class SteppingClock(FakeClock):
    def sleep(self, seconds: float) -> None:
        self.now += seconds


class TimedGeocoder:
    def __init__(self, clock):
        self.clock = clock
        self.request_times: list[float] = []

    def reverse(self, coordinate: Coordinate) -> str:
        self.request_times.append(self.clock())
        self.clock.now += 0.001
        return "Rua Direita, Sé, São Paulo"


def test_lookup_spacing_holds_across_back_to_back_searches():
    clock = SteppingClock()
    geocoder = TimedGeocoder(clock)
    enricher = AddressEnricher(geocoder, sleep=clock.sleep, clock=clock)
    orchestrator = SearchOrchestrator(
        overpass=TieredOverpass([_church(1, 100), _church(2, 200)], [_church(3, 100), _church(4, 200)]),
        enricher=enricher,
        cache=SearchCache(clock=clock),
    )

    orchestrator.search(SAO_PAULO, 5000)
    orchestrator.search(Coordinate(-22.9068, -43.1729), 5000)

    times = geocoder.request_times
    gaps = [later - earlier for earlier, later in zip(times, times[1:])]
    assert len(times) == 4
    assert all(gap >= 1.1 - 1e-6 for gap in gaps)


def test_mutating_results_does_not_touch_the_cache():
    overpass = TieredOverpass([_church(1, 500), _church(2, 900)])
    orchestrator = _orchestrator(overpass)

    first = orchestrator.search(SAO_PAULO, 5000)
    first[0].name = "Renamed"
    first.pop()
    second = orchestrator.search(SAO_PAULO, 5000)
    second.clear()
    third = orchestrator.search(SAO_PAULO, 5000)

    assert len(overpass.queries) == 1
    assert [place.name for place in third] == ["Igreja 1", "Igreja 2"]
