"""
Deadline tests against a local server that stalls before the headers or the body.
Run: pytest tests/test_timeouts.py -v
"""

import time
from dataclasses import dataclass

import pytest

from justhttp import RequestArguments, TimeoutError, get, post


@dataclass
class SampleJson:
    Cluster_name: str
    Pings: int


PAYLOAD = SampleJson(Cluster_name="Hello server", Pings=1)


@pytest.fixture
def slow_server(make_server):
    return make_server(delay_ms=1000)


class TestDeadline:
    @pytest.mark.parametrize("timeout_ms", [0, 1500])
    def test_deadline_longer_than_latency(self, slow_server, timeout_ms):
        got = post(
            f"{slow_server}/valid-post-url",
            PAYLOAD,
            RequestArguments(timeout_in_milliseconds=timeout_ms),
            response_type=SampleJson,
        )
        assert got == SampleJson(Cluster_name="server cluster", Pings=202)

    def test_deadline_shorter_than_latency(self, slow_server):
        with pytest.raises(TimeoutError) as exc:
            post(
                f"{slow_server}/valid-post-url",
                PAYLOAD,
                RequestArguments(timeout_in_milliseconds=500),
                response_type=SampleJson,
            )
        assert exc.value.limit == 500
        assert str(exc.value) == "Time limit (500ms) exceeded"

    def test_no_overrides_means_no_deadline(self, slow_server):
        got = post(f"{slow_server}/valid-post-url", PAYLOAD, response_type=SampleJson)
        assert got.Pings == 202


class TestLocalServer:
    def test_get_valid_url(self, make_server):
        base = make_server()
        got = get(f"{base}/valid-url", response_type=SampleJson)
        assert got == SampleJson(Cluster_name="cl1", Pings=2)


class TestStalledBody:
    def test_deadline_covers_body_read(self, make_server):
        base = make_server(delay_ms=400, stall_ms=900)
        started = time.monotonic()
        with pytest.raises(TimeoutError) as exc:
            get(f"{base}/valid-url", RequestArguments(timeout_in_milliseconds=500),
                response_type=SampleJson)
        elapsed = time.monotonic() - started
        assert exc.value.limit == 500
        assert elapsed < 0.8

    def test_stalled_body_within_deadline(self, make_server):
        base = make_server(stall_ms=200)
        got = get(f"{base}/valid-url", RequestArguments(timeout_in_milliseconds=1500),
                  response_type=SampleJson)
        assert got == SampleJson(Cluster_name="cl1", Pings=2)
