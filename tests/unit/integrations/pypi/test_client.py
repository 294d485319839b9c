"""Unit tests for the PyPI release client."""

from __future__ import annotations

import httpx
import pytest

from dockside.integrations.pypi import PyPIClient, find_update


def _transport(status: int = 200, payload: object | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/pypi/dockside/json"
        return httpx.Response(status, json=payload if payload is not None else {})

    return httpx.MockTransport(handler)


@pytest.mark.unit
class TestPyPIClient:
    """Tests for PyPIClient."""

    def test_latest_version(self) -> None:
        with PyPIClient(transport=_transport(payload={"info": {"version": "1.4.0"}})) as client:
            assert client.latest_version("dockside") == "1.4.0"

    def test_error_status_raises(self) -> None:
        with (
            PyPIClient(transport=_transport(status=404)) as client,
            pytest.raises(httpx.HTTPStatusError),
        ):
            client.latest_version("dockside")


@pytest.mark.unit
class TestFindUpdate:
    """Tests for find_update."""

    @pytest.mark.parametrize(
        ("current", "latest", "expected"),
        [
            ("0.1.0", "0.2.0", "0.2.0"),
            ("0.1.0", "0.1.0", None),
            ("0.10.0", "0.9.0", None),
        ],
    )
    def test_compares_release_numbers(
        self, current: str, latest: str, expected: str | None
    ) -> None:
        transport = _transport(payload={"info": {"version": latest}})
        assert find_update(current, transport=transport) == expected

    def test_lookup_failure_means_no_update(self) -> None:
        """An unreachable index never blocks startup."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        assert find_update("0.1.0", transport=httpx.MockTransport(handler)) is None

    @pytest.mark.parametrize("payload", [{"info": {}}, {"info": {"version": "2.0.0rc1"}}])
    def test_unusable_response_means_no_update(self, payload: object) -> None:
        assert find_update("0.1.0", transport=_transport(payload=payload)) is None
