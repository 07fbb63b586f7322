# File: tests/test_poller.py

import pytest

from brandsense.client.api import ApiError
from brandsense.client.poller import AnalysisPoller

PROJECT_ID = "11111111-1111-4111-8111-111111111111"


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class ScriptedClient:
    """Returns the scripted responses in order; the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def get_project(self, project_id):
        response = self.responses[min(self.calls, len(self.responses) - 1)]
        self.calls += 1
        if isinstance(response, Exception):
            raise response
        return response


def body(status, data=None):
    return {"project": {"id": PROJECT_ID, "dataStatus": status}, "data": data}


def make_poller(client, clock, **kwargs):
    return AnalysisPoller(client, sleep=clock.sleep, clock=clock, **kwargs)


def test_stops_when_ready():
    clock = FakeClock()
    client = ScriptedClient(body("processing"), body("processing"), body("ready", {"brandIdentity": {}}))

    result = make_poller(client, clock).wait_until_settled(PROJECT_ID)

    assert result.is_ready
    assert result.attempts == 3
    assert result.data == {"brandIdentity": {}}
    assert clock.now == 20.0


def test_stops_on_error_status():
    clock = FakeClock()
    result = make_poller(ScriptedClient(body("error")), clock).wait_until_settled(PROJECT_ID)
    assert result.status == "error"
    assert result.attempts == 1
    assert not result.timed_out


def test_times_out_at_ceiling():
    clock = FakeClock()
    client = ScriptedClient(body("processing"))

    result = make_poller(client, clock, interval=10, ceiling=300).wait_until_settled(PROJECT_ID)

    assert result.timed_out
    assert result.status == "processing"
    assert result.attempts == 31
    assert clock.now == 300.0


def test_transient_errors_keep_polling():
    clock = FakeClock()
    client = ScriptedClient(ApiError(None, "Network error"), ApiError(500, "boom"), body("ready"))
    ticks = []

    result = make_poller(client, clock).wait_until_settled(PROJECT_ID, on_tick=lambda r: ticks.append(r.status))

    assert result.is_ready
    assert ticks == [None, None, "ready"]


def test_last_fetch_wins_after_error():
    clock = FakeClock()
    client = ScriptedClient(body("processing"), ApiError(503, "unavailable"))

    result = make_poller(client, clock, interval=10, ceiling=20).wait_until_settled(PROJECT_ID)

    assert result.timed_out
    assert result.status == "processing"


@pytest.mark.parametrize("status_code", [401, 404])
def test_auth_and_missing_stop_polling(status_code):
    clock = FakeClock()
    client = ScriptedClient(body("processing"), ApiError(status_code, "nope"))

    with pytest.raises(ApiError):
        make_poller(client, clock).wait_until_settled(PROJECT_ID)
    assert client.calls == 2


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        AnalysisPoller(ScriptedClient(body("ready")), interval=0)
