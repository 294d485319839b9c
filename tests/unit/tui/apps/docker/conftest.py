"""Fixtures for dashboard tests: an in-memory Docker client and entity factories."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest

from dockside.core.config import Config
from dockside.integrations.docker import (
    DockerContainer,
    DockerImage,
    DockerNetwork,
    DockerVolume,
    LogStreamOptions,
)
from dockside.tui.events import Channel, Message


class FakeDockerClient:
    """Stands in for DockerClient with canned listings and recorded calls.

    Set `errors[method_name]` to an exception to make that method raise.
    """

    base_url = "unix:///var/run/docker.sock"

    def __init__(self) -> None:
        self.containers: list[DockerContainer] = []
        self.images: list[DockerImage] = []
        self.volumes: list[DockerVolume] = []
        self.networks: list[DockerNetwork] = []
        self.log_lines: list[str] = []
        self.calls: list[tuple[Any, ...]] = []
        self.errors: dict[str, Exception] = {}

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    async def list_containers(self) -> list[DockerContainer]:
        self._record("list_containers")
        return list(self.containers)

    async def list_images(self, dangling: bool = True) -> list[DockerImage]:
        self._record("list_images", dangling)
        return [i for i in self.images if dangling or not i.is_dangling]

    async def list_volumes(self) -> list[DockerVolume]:
        self._record("list_volumes")
        return list(self.volumes)

    async def list_networks(self) -> list[DockerNetwork]:
        self._record("list_networks")
        return list(self.networks)

    async def start_container(self, container_id: str) -> None:
        self._record("start_container", container_id)

    async def stop_container(self, container_id: str) -> None:
        self._record("stop_container", container_id)

    async def remove_container(self, container_id: str, force: bool = False) -> None:
        self._record("remove_container", container_id, force)

    async def remove_image(self, image_id: str, force: bool = False) -> None:
        self._record("remove_image", image_id, force)

    async def remove_volume(self, name: str, force: bool = False) -> None:
        self._record("remove_volume", name, force)

    async def remove_network(self, name: str) -> None:
        self._record("remove_network", name)

    async def prune_networks(self) -> list[str]:
        self._record("prune_networks")
        return []

    async def stream_logs(
        self, container_id: str, options: LogStreamOptions | None = None
    ) -> AsyncIterator[str]:
        self._record("stream_logs", container_id, options)
        for line in self.log_lines:
            yield line

    async def exec_shell(self, container_id: str, shell: str) -> None:
        self._record("exec_shell", container_id, shell)

    def called(self, name: str) -> list[tuple[Any, ...]]:
        """Return the recorded calls to `name`."""
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_client() -> FakeDockerClient:
    """Create an empty fake Docker client."""
    return FakeDockerClient()


@pytest.fixture
def config() -> Config:
    """Create a default config that never looks for updates."""
    return Config(check_for_update=False)


@pytest.fixture
def channel() -> Channel[Message]:
    """Create a channel standing in for the event loop's inbound side."""
    return Channel(32)


@pytest.fixture
def drain() -> Callable[[Channel[Message]], list[Message]]:
    """Return a helper that empties a channel without waiting."""

    def _drain(ch: Channel[Message]) -> list[Message]:
        messages: list[Message] = []
        while (message := ch.try_recv()) is not None:
            messages.append(message)
        return messages

    return _drain


@pytest.fixture
def make_container() -> Callable[..., DockerContainer]:
    """Return a DockerContainer factory."""

    def _make(
        cid: str = "c1" * 16,
        name: str = "web",
        image: str = "nginx:latest",
        running: bool = True,
        created: int = 1_700_000_000,
        status: str | None = None,
    ) -> DockerContainer:
        return DockerContainer(
            id=cid,
            names=[f"/{name}"],
            image=image,
            created=created,
            running=running,
            state="running" if running else "exited",
            status=status or ("Up 2 hours" if running else "Exited (0) 1 hour ago"),
        )

    return _make


@pytest.fixture
def make_image() -> Callable[..., DockerImage]:
    """Return a DockerImage factory."""

    def _make(
        iid: str = "a" * 64,
        name: str = "nginx",
        tag: str = "latest",
        created: int = 1_700_000_000,
        size: int = 1_000_000,
    ) -> DockerImage:
        return DockerImage(id=iid, name=name, tag=tag, created=created, size=size)

    return _make


@pytest.fixture
def make_volume() -> Callable[..., DockerVolume]:
    """Return a DockerVolume factory."""

    def _make(name: str = "data", driver: str = "local") -> DockerVolume:
        return DockerVolume(name=name, driver=driver, mountpoint=f"/var/lib/docker/volumes/{name}")

    return _make


@pytest.fixture
def make_network() -> Callable[..., DockerNetwork]:
    """Return a DockerNetwork factory."""

    def _make(name: str = "bridge", nid: str = "n" * 64, driver: str = "bridge") -> DockerNetwork:
        return DockerNetwork(id=nid, name=name, driver=driver, scope="local")

    return _make
