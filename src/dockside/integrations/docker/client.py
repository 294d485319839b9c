"""Docker engine client wrapper.

Wraps the official docker SDK with lazy connection, retry on connect,
consistent error translation, and async entry points that run the SDK's
blocking calls in worker threads so the dashboard's event loop never
stalls on the engine.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dockside.integrations.docker.exceptions import (
    DockerAPIError,
    DockerConflictError,
    DockerConnectionError,
    DockerError,
    DockerNotFoundError,
)
from dockside.integrations.docker.models import (
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerVolume,
    LogStreamOptions,
)

if TYPE_CHECKING:
    import docker
    from docker.api import APIClient

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_TIMEOUT = 60
DEFAULT_RETRIES = 3
LOG_CHUNK_SIZE = 4096


class DockerClient:
    """Async-friendly Docker engine client.

    Example:
        ```python
        from dockside.integrations.docker import DockerClient

        with DockerClient("unix:///var/run/docker.sock") as client:
            client.connect()
            containers = await client.list_containers()
        ```
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        """Initialize the client.

        The SDK client is created on first use.

        Args:
            base_url: Engine endpoint, e.g. "unix:///var/run/docker.sock".
            timeout: Request timeout in seconds.
            retries: Connection attempts made by `connect()`.
        """
        self._base_url = base_url
        self._timeout = timeout
        self._retries = retries
        self._sdk: docker.DockerClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def sdk(self) -> docker.DockerClient:
        """Get the docker SDK client, creating it on first access.

        Raises:
            DockerConnectionError: If the endpoint cannot be reached.
        """
        if self._sdk is None:
            import docker
            from docker.errors import DockerException

            try:
                self._sdk = docker.DockerClient(base_url=self._base_url, timeout=self._timeout)
            except (DockerException, OSError) as e:
                raise DockerConnectionError(
                    message=f"Cannot connect to Docker at {self._base_url}",
                    original_error=e,
                ) from e
        return self._sdk

    @property
    def api(self) -> APIClient:
        """Get the low-level API client."""
        return self.sdk.api

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> DockerError:
        """Translate a docker SDK exception to a custom exception.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_id: Id or name of the resource.

        Returns:
            An appropriate DockerError subclass.
        """
        from docker.errors import APIError, NotFound

        if isinstance(e, NotFound):
            return DockerNotFoundError(
                message=e.explanation or "Docker resource not found",
                resource_type=resource_type,
                resource_id=resource_id,
            )

        if isinstance(e, APIError):
            explanation = e.explanation or str(e)
            if e.status_code == 409:
                return DockerConflictError(
                    message=explanation,
                    resource_type=resource_type,
                    resource_id=resource_id,
                )
            return DockerAPIError(
                message=explanation,
                status_code=e.status_code,
                resource_type=resource_type,
                resource_id=resource_id,
            )

        if isinstance(e, OSError):
            return DockerConnectionError(
                message=f"Lost connection to Docker at {resource_id or 'engine'}",
                original_error=e,
            )

        return DockerError(
            message=str(e),
            resource_type=resource_type,
            resource_id=resource_id,
        )

    async def _call(
        self,
        fn: Callable[..., T],
        *args: Any,
        resource_type: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> T:
        """Run a blocking SDK call in a worker thread, translating errors."""
        from docker.errors import DockerException

        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except (DockerException, OSError) as e:
            raise self.translate_api_exception(e, resource_type, resource_id) from e

    # =========================================================================
    # Retry Decorator
    # =========================================================================

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for transient connection errors.

        Returns:
            A tenacity retry decorator configured with exponential backoff.
        """
        return retry(
            retry=retry_if_exception_type(DockerConnectionError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    # =========================================================================
    # Connection Check
    # =========================================================================

    def connect(self) -> str:
        """Ping the engine, retrying transient failures.

        Returns:
            The engine version string.

        Raises:
            DockerConnectionError: If the engine stays unreachable.
        """

        @self.make_retry_decorator()
        def _ping() -> str:
            from docker.errors import DockerException

            try:
                self.sdk.ping()
                version: dict[str, Any] = self.sdk.version()
            except (DockerException, OSError) as e:
                raise DockerConnectionError(
                    message=f"Docker engine at {self._base_url} is not responding",
                    original_error=e,
                ) from e
            return str(version.get("Version", "unknown"))

        engine_version = _ping()
        logger.info("docker_connected", base_url=self._base_url, version=engine_version)
        return engine_version

    # =========================================================================
    # Listing
    # =========================================================================

    async def list_containers(self) -> list[DockerContainer]:
        """List all containers, running or not."""
        data = await self._call(self.api.containers, all=True)
        return [DockerContainer.from_api(c) for c in data]

    async def list_images(self, dangling: bool = True) -> list[DockerImage]:
        """List top-level images.

        Args:
            dangling: Include untagged images.
        """
        data = await self._call(self.api.images)
        images = [DockerImage.from_api(i) for i in data]
        if not dangling:
            images = [i for i in images if not i.is_dangling]
        return images

    async def list_volumes(self) -> list[DockerVolume]:
        """List volumes."""
        data = await self._call(self.api.volumes)
        return [DockerVolume.from_api(v) for v in (data or {}).get("Volumes") or []]

    async def list_networks(self) -> list[DockerNetwork]:
        """List networks."""
        data = await self._call(self.api.networks)
        return [DockerNetwork.from_api(n) for n in data]

    # =========================================================================
    # Mutations
    # =========================================================================

    async def start_container(self, container_id: str) -> None:
        await self._call(
            self.api.start, container_id, resource_type="container", resource_id=container_id
        )
        logger.info("container_started", container=container_id)

    async def stop_container(self, container_id: str) -> None:
        await self._call(
            self.api.stop, container_id, resource_type="container", resource_id=container_id
        )
        logger.info("container_stopped", container=container_id)

    async def remove_container(self, container_id: str, force: bool = False) -> None:
        await self._call(
            self.api.remove_container,
            container_id,
            force=force,
            resource_type="container",
            resource_id=container_id,
        )
        logger.info("container_removed", container=container_id, force=force)

    async def remove_image(self, image_id: str, force: bool = False) -> None:
        await self._call(
            self.api.remove_image,
            image_id,
            force=force,
            resource_type="image",
            resource_id=image_id,
        )
        logger.info("image_removed", image=image_id, force=force)

    async def remove_volume(self, name: str, force: bool = False) -> None:
        await self._call(
            self.api.remove_volume,
            name,
            force=force,
            resource_type="volume",
            resource_id=name,
        )
        logger.info("volume_removed", volume=name, force=force)

    async def remove_network(self, name: str) -> None:
        await self._call(
            self.api.remove_network, name, resource_type="network", resource_id=name
        )
        logger.info("network_removed", network=name)

    async def prune_networks(self) -> list[str]:
        """Remove all unused networks.

        Returns:
            Names of the removed networks.
        """
        result = await self._call(self.api.prune_networks, resource_type="network")
        deleted: list[str] = (result or {}).get("NetworksDeleted") or []
        logger.info("networks_pruned", count=len(deleted))
        return deleted

    # =========================================================================
    # Streaming
    # =========================================================================

    async def stream_logs(
        self,
        container_id: str,
        options: LogStreamOptions | None = None,
    ) -> AsyncIterator[str]:
        """Yield a container's output line by line.

        Stream failures are yielded as a final "Error streaming logs" line
        rather than raised, so a log view never has to handle them.

        Args:
            container_id: Container to follow.
            options: Tail/follow options.
        """
        from docker.errors import DockerException

        options = options or LogStreamOptions()
        try:
            stream = await self._call(
                self.api.logs,
                container_id,
                stream=True,
                follow=options.follow,
                tail="all" if options.all else options.tail,
                timestamps=options.timestamps,
                resource_type="container",
                resource_id=container_id,
            )
        except DockerError as e:
            logger.warning("log_stream_error", container=container_id, error=str(e))
            yield f"Error streaming logs: {e}"
            return

        pending = ""
        try:
            while True:
                chunk = await asyncio.to_thread(next, stream, None)
                if chunk is None:
                    break
                pending += chunk.decode("utf-8", errors="replace")
                *lines, pending = pending.split("\n")
                for line in lines:
                    yield line.rstrip("\r")
            if pending:
                yield pending
        except (DockerException, OSError, ValueError) as e:
            logger.warning("log_stream_error", container=container_id, error=str(e))
            yield f"Error streaming logs: {e}"
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

    # =========================================================================
    # Interactive Exec
    # =========================================================================

    async def exec_shell(self, container_id: str, shell: str) -> None:
        """Run an interactive shell in a container on the current terminal.

        The caller must have released the terminal (e.g. suspended the TUI).

        Args:
            container_id: Container to exec into.
            shell: Command to run, e.g. "/bin/bash".
        """
        exec_id = await self._call(
            self._create_exec,
            container_id,
            shell,
            resource_type="container",
            resource_id=container_id,
        )
        await self._call(
            self._run_exec, exec_id, resource_type="container", resource_id=container_id
        )

    def _create_exec(self, container_id: str, shell: str) -> str:
        result: dict[str, Any] = self.api.exec_create(
            container_id, [shell], stdin=True, tty=True
        )
        return str(result["Id"])

    def _run_exec(self, exec_id: str) -> None:
        """Pump the exec socket to and from the real terminal until it closes."""
        try:
            import select
            import sys
            import termios
            import tty as tty_module
        except ImportError as e:
            raise DockerError("Interactive exec requires a Unix terminal") from e

        sock = self.api.exec_start(exec_id, tty=True, socket=True)
        raw = getattr(sock, "_sock", sock)
        stdin_fd = sys.stdin.fileno()
        stdout_fd = sys.stdout.fileno()

        try:
            size = os.get_terminal_size(stdout_fd)
            self.api.exec_resize(exec_id, height=size.lines, width=size.columns)
        except OSError:
            pass  # Not a terminal; keep the engine's default size

        old_settings = termios.tcgetattr(stdin_fd)
        try:
            tty_module.setraw(stdin_fd)
            while True:
                readable, _, _ = select.select([raw, stdin_fd], [], [], 0.1)
                if raw in readable:
                    data = raw.recv(LOG_CHUNK_SIZE)
                    if not data:
                        break
                    os.write(stdout_fd, data)
                if stdin_fd in readable:
                    data = os.read(stdin_fd, 1024)
                    if data:
                        raw.sendall(data)
        finally:
            termios.tcsetattr(stdin_fd, termios.TCSADRAIN, old_settings)
            sock.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        if self._sdk is not None:
            self._sdk.close()
            self._sdk = None
        logger.debug("docker_client_closed")

    def __enter__(self) -> DockerClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
