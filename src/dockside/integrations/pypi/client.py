"""PyPI JSON API client used to look for newer dockside releases."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

PYPI_URL = "https://pypi.org"
DEFAULT_TIMEOUT = 5.0


class PyPIClient:
    """Read-only client for the PyPI JSON API.

    Example:
        ```python
        from dockside.integrations.pypi import PyPIClient

        with PyPIClient() as client:
            print(client.latest_version("dockside"))
        ```
    """

    def __init__(
        self,
        base_url: str = PYPI_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Index root.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        client_kwargs: dict[str, Any] = {
            "base_url": base_url,
            "timeout": httpx.Timeout(timeout),
            "headers": {"Accept": "application/json"},
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def latest_version(self, package: str) -> str:
        """Return the newest released version of `package`.

        Raises:
            httpx.HTTPError: If the request fails or the index answers with
                an error status.
            KeyError: If the response has no version.
        """
        response = self._client.get(f"/pypi/{package}/json")
        response.raise_for_status()
        version: str = response.json()["info"]["version"]
        return version

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PyPIClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _release_tuple(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.lstrip("v").split("."))


def find_update(
    current: str,
    package: str = "dockside",
    transport: httpx.BaseTransport | None = None,
) -> str | None:
    """Return the newer release to offer, or None.

    Lookup failures are logged and treated as "no update" so an offline
    machine starts exactly as an online one.
    """
    try:
        with PyPIClient(transport=transport) as client:
            latest = client.latest_version(package)
        if _release_tuple(latest) > _release_tuple(current):
            return latest
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.debug("update_check_failed", package=package, error=str(e))
        return None
    logger.debug("update_check_done", package=package, current=current)
    return None
