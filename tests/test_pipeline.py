"""
Pipeline tests: concurrent fetch/join, filtering, sorting, failure handling.
"""
from __future__ import annotations

import threading
import time

import pytest

from cargotracker.errors import FeedError, MalformedFeedError, NetworkError
from cargotracker.ingestion.pipeline import CargoFlightPipeline, sort_by_schedule


class TestRun:
    def test_filters_and_sorts_cargo_flights(self, stub_client, classifier):
        pipeline = CargoFlightPipeline(client=stub_client(), classifier=classifier)
        result = pipeline.run()

        # CV resolves to 'Cargolux...' (keyword), QR is in the code list
        assert [f.flight_id for f in result.flights] == ["CV7301", "QR123"]
        assert result.total_flights == 4
        assert result.directory["QR"] == "Qatar Airways"

    def test_fetches_both_feeds(self, stub_client, classifier):
        client = stub_client()
        CargoFlightPipeline(client=client, classifier=classifier).run()
        assert sorted(client.calls) == ["airlines", "flights"]

    def test_no_cargo_flights(self, stub_client, classifier):
        flights = """<airport name="OSL"><flights><flight>
            <airline>DY</airline><flight_id>DY1</flight_id>
            <schedule_time>2024-06-14T08:00:00Z</schedule_time>
        </flight></flights></airport>"""
        pipeline = CargoFlightPipeline(client=stub_client(flights=flights), classifier=classifier)
        result = pipeline.run()
        assert result.flights == []
        assert result.total_flights == 1

    @pytest.mark.parametrize("side", ["flights", "airlines"])
    def test_network_error_aborts(self, stub_client, classifier, side):
        client = stub_client(**{side: NetworkError(f"{side} down", feed=side)})
        pipeline = CargoFlightPipeline(client=client, classifier=classifier)

        with pytest.raises(NetworkError, match=f"{side} down"):
            pipeline.run()

    @pytest.mark.parametrize("side", ["flights", "airlines"])
    def test_malformed_payload_aborts(self, stub_client, classifier, side):
        client = stub_client(**{side: "<html><body>oops</body></html>"})
        pipeline = CargoFlightPipeline(client=client, classifier=classifier)

        with pytest.raises(MalformedFeedError):
            pipeline.run()

    def test_fails_fast_without_waiting_for_other_feed(self, classifier):
        release = threading.Event()

        class SlowFlightsClient:
            def fetch_flights(self):
                release.wait(5)
                return b"<airport/>"

            def fetch_airline_names(self):
                raise NetworkError("airline names feed returned HTTP 500")

        pipeline = CargoFlightPipeline(client=SlowFlightsClient(), classifier=classifier)
        start = time.perf_counter()
        try:
            with pytest.raises(FeedError):
                pipeline.run()
            assert time.perf_counter() - start < 2
        finally:
            release.set()

    def test_requests_run_concurrently(self, classifier, flights_xml, airlines_xml):
        barrier = threading.Barrier(2, timeout=5)

        class BarrierClient:
            # Each fetch waits for the other: only passes if both run at once
            def fetch_flights(self):
                barrier.wait()
                return flights_xml

            def fetch_airline_names(self):
                barrier.wait()
                return airlines_xml

        result = CargoFlightPipeline(client=BarrierClient(), classifier=classifier).run()
        assert len(result.flights) == 2


class TestSortBySchedule:
    def test_ascending_for_any_input_order(self, make_flight):
        t1 = make_flight(flight_id="T1", schedule_time="2024-06-14T06:00:00Z")
        t2 = make_flight(flight_id="T2", schedule_time="2024-06-14T08:30:00Z")
        t3 = make_flight(flight_id="T3", schedule_time="2024-06-15T01:00:00Z")

        for order in ([t3, t1, t2], [t2, t3, t1], [t1, t2, t3], [t3, t2, t1]):
            assert [f.flight_id for f in sort_by_schedule(order)] == ["T1", "T2", "T3"]

    def test_compares_instants_not_strings(self, make_flight):
        early = make_flight(flight_id="early", schedule_time="2024-06-14T09:00:00+02:00")
        late = make_flight(flight_id="late", schedule_time="2024-06-14T08:00:00Z")
        assert [f.flight_id for f in sort_by_schedule([late, early])] == ["early", "late"]

    def test_stable_for_equal_times(self, make_flight):
        flights = [make_flight(flight_id=str(i)) for i in range(5)]
        assert [f.flight_id for f in sort_by_schedule(flights)] == ["0", "1", "2", "3", "4"]

    def test_missing_times_go_last(self, make_flight):
        flights = [
            make_flight(flight_id="blank", schedule_time=""),
            make_flight(flight_id="late", schedule_time="2024-06-14T12:00:00Z"),
            make_flight(flight_id="junk", schedule_time="n/a"),
            make_flight(flight_id="early", schedule_time="2024-06-14T06:00:00Z"),
        ]
        assert [f.flight_id for f in sort_by_schedule(flights)] == ["early", "late", "blank", "junk"]

    def test_out_of_range_time_sorts_last(self, make_flight):
        flights = [
            make_flight(flight_id="ancient", schedule_time="0001-01-01T00:30:00+05:00"),
            make_flight(flight_id="ok", schedule_time="2024-06-14T06:00:00Z"),
        ]
        assert flights[0].scheduled_at is None
        assert [f.flight_id for f in sort_by_schedule(flights)] == ["ok", "ancient"]
