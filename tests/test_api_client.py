import pytest
import requests

from api_client import ApiError, BenchApi


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append((method, url, timeout, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def _api(session):
    return BenchApi("http://bench.local/", timeout=3.0, session=session)


def test_list_tests() -> None:
    session = FakeSession(FakeResponse(body=[{"id": 1, "name": "Run A"}, {"id": 2, "name": "Run B"}]))
    tests = _api(session).list_tests()
    assert [(t.id, t.name) for t in tests] == [(1, "Run A"), (2, "Run B")]
    assert session.calls[0][:3] == ("GET", "http://bench.local/tests", 3.0)


def test_live_series_params_and_parsing() -> None:
    rows = [{"idx": 11, "t_hour": 0.1, "t1": 1.0, "t2": None}, {"idx": 12, "rpm": 4000}]
    session = FakeSession(FakeResponse(body=rows))
    samples = _api(session).live_series(5, 2, from_idx=10, limit=500)

    assert [s.idx for s in samples] == [11, 12]
    assert samples[0].t2 is None
    assert samples[1].rpm == 4000.0
    method, url, _, kwargs = session.calls[0]
    assert url == "http://bench.local/live_series"
    assert kwargs["params"] == {"test_id": 5, "system": 2, "from_idx": 10, "limit": 500}


def test_series_sends_module_and_step() -> None:
    session = FakeSession(FakeResponse(body=[]))
    assert _api(session).series(3, 1, step=200) == []
    _, url, _, kwargs = session.calls[0]
    assert url == "http://bench.local/series/3"
    assert kwargs["params"] == {"module": 1, "step": 200}


def test_backend_detail_is_surfaced() -> None:
    session = FakeSession(FakeResponse(404, {"detail": "Test not found"}))
    with pytest.raises(ApiError) as err:
        _api(session).characterization(9, {"life": "bol"})
    assert str(err.value) == "Test not found"
    assert err.value.status == 404


def test_error_without_detail() -> None:
    session = FakeSession(FakeResponse(500, None))
    with pytest.raises(ApiError) as err:
        _api(session).list_tests()
    assert "HTTP 500" in str(err.value)


def test_transport_error_becomes_api_error() -> None:
    session = FakeSession(exc=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as err:
        _api(session).list_tests()
    assert err.value.status is None


def test_upload_has_no_timeout() -> None:
    session = FakeSession(FakeResponse(body={"test": "T1", "rows": 10, "test_id": 4}))
    out = _api(session).upload("run.csv", b"a,b\n1,2\n")
    assert out["test_id"] == 4
    method, url, timeout, kwargs = session.calls[0]
    assert (method, url, timeout) == ("POST", "http://bench.local/upload", None)
    assert kwargs["files"]["file"][0] == "run.csv"
