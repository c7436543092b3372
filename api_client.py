# api_client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, List, Optional, Union

import requests

import settings
from Sample import Sample

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = object()


class ApiError(Exception):
    """Backend call failed (transport error or non-2xx answer)."""

    def __init__(self, message: str, status: Optional[int] = None, detail: Any = None):
        super().__init__(message)
        self.status = status
        self.detail = detail


@dataclass
class TestRun:
    id: int
    name: str


def _detail_from(resp: requests.Response) -> Any:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None


class BenchApi:
    """Thin client over the bench backend."""

    def __init__(
        self,
        base_url: str = settings.API_URL,
        *,
        timeout: float = settings.API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # -----------------
    # Transport
    # -----------------
    def _request(self, method: str, path: str, *, timeout: Any = _DEFAULT_TIMEOUT, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        if timeout is _DEFAULT_TIMEOUT:
            timeout = self.timeout
        logger.debug("%s %s params=%s", method, path, kwargs.get("params"))
        try:
            resp = self.session.request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(f"Backend not reachable: {exc}") from exc

        if not resp.ok:
            detail = _detail_from(resp)
            message = str(detail) if detail else f"HTTP {resp.status_code} for {method} {path}"
            raise ApiError(message, status=resp.status_code, detail=detail)

        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from {method} {path}", status=resp.status_code) from exc

    # -----------------
    # Endpoints
    # -----------------
    def list_tests(self) -> List[TestRun]:
        data = self._request("GET", "/tests")
        return [TestRun(id=int(t["id"]), name=str(t["name"])) for t in data]

    def live_series(self, test_id: int, system: int, from_idx: int, limit: int = settings.LIVE_BATCH_LIMIT) -> List[Sample]:
        data = self._request(
            "GET",
            "/live_series",
            params={"test_id": test_id, "system": system, "from_idx": from_idx, "limit": limit},
        )
        return [Sample.from_record(r) for r in data]

    def series(self, test_id: int, system: int, step: int = settings.DEFAULT_STEP) -> List[Sample]:
        # the historical endpoint still calls the system "module"
        data = self._request("GET", f"/series/{test_id}", params={"module": system, "step": step})
        return [Sample.from_record(r) for r in data]

    def characterization(self, test_id: int, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("GET", f"/characterization/{test_id}", params=params)

    def upload(self, filename: str, content: Union[bytes, BinaryIO]) -> Dict[str, Any]:
        # no timeout: the backend parses the whole file before answering
        return self._request("POST", "/upload", files={"file": (filename, content)}, timeout=None)
