"""Unit tests for the logs, describe and attach pages."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from rich.console import Console

from dockside.core.config import Config
from dockside.integrations.docker import DockerContainer, DockerImage, DockerNetwork, DockerVolume
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.pages import AttachPage, DescribePage, LogsPage
from dockside.tui.apps.docker.pages.describe import default_return
from dockside.tui.events import (
    TICK,
    Channel,
    Key,
    Message,
    MessageResponse,
    Transition,
    TransitionMessage,
)
from dockside.tui.tasks import pending_tasks

Drain = Callable[[Channel[Message]], list[Message]]


async def _settle() -> None:
    loop = asyncio.get_running_loop()
    await asyncio.gather(*(t for t in pending_tasks() if t.get_loop() is loop))


def _render(renderable: Any) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


# ============================================================================
# LogsPage
# ============================================================================


@pytest.mark.unit
class TestLogsPage:
    """Tests for log streaming and scrolling."""

    @pytest.mark.asyncio
    async def test_requires_container(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        page = LogsPage(fake_client, channel.sender(), config)
        with pytest.raises(ValueError, match="No docker container"):
            await page.initialise(AppContext())

    @pytest.mark.asyncio
    async def test_stream_appends_lines_and_ticks(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        fake_client.log_lines = ["one", "two", "three"]
        container = make_container()
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=container))
        await _settle()

        assert page.lines == ["one", "two", "three"]
        assert drain(channel) == [TICK, TICK, TICK]
        assert fake_client.called("stream_logs")[0][1] == container.id

        await page.update(Key.NULL)
        assert page.position == 2
        assert "three" in _render(page.draw())

    @pytest.mark.asyncio
    async def test_manual_scroll_disables_auto_scroll(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        fake_client.log_lines = [f"line {i}" for i in range(30)]
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=make_container()))
        await _settle()
        await page.update(Key.NULL)
        assert page.position == 29

        await page.update(Key.char("k"))
        assert not page.auto_scroll
        assert page.position == 28
        assert " <Space> = auto-scroll " in page.get_help().entries()

        await page.update(Key.PAGE_UP)
        assert page.position == 8
        await page.update(Key.char("g"))
        assert page.position == 0
        await page.update(Key.char("j"))
        assert page.position == 1
        assert "> line 1" in _render(page.draw())

        await page.update(Key.char(" "))
        assert page.auto_scroll
        assert page.position == 29
        assert " <Space> = auto-scroll " not in page.get_help().entries()

    @pytest.mark.asyncio
    async def test_all_restarts_stream_with_full_history(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        fake_client.log_lines = ["a", "b"]
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=make_container()))
        await _settle()

        await page.update(Key.char("a"))
        await _settle()

        calls = fake_client.called("stream_logs")
        assert len(calls) == 2
        assert calls[0][2].all is False
        assert calls[1][2].all is True
        assert page.lines == ["a", "b"]

    @pytest.mark.asyncio
    async def test_esc_returns_to_then(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        then = Transition.to_image_page(AppContext())
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=make_container(), then=then))
        await _settle()
        drain(channel)

        await page.update(Key.ESC)
        assert drain(channel) == [TransitionMessage(then)]

    @pytest.mark.asyncio
    async def test_esc_without_then_goes_to_containers(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        container = make_container()
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=container))
        await _settle()

        await page.update(Key.ESC)
        assert drain(channel) == [
            TransitionMessage(Transition.to_container_page(AppContext(docker_container=container)))
        ]

    @pytest.mark.asyncio
    async def test_close_clears_buffer(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        fake_client.log_lines = ["x"]
        page = LogsPage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(docker_container=make_container()))
        await _settle()

        await page.close()
        assert page.lines == []
        assert page.container is None
        assert "Waiting for output" in _render(page.draw())

    def test_help_title_before_initialise(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
    ) -> None:
        page = LogsPage(fake_client, channel.sender(), config)
        assert page.get_help().name == "Logs ()"


# ============================================================================
# DescribePage
# ============================================================================


@pytest.mark.unit
class TestDescribePage:
    """Tests for describe rendering and navigation."""

    @pytest.mark.asyncio
    async def test_requires_describable(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        page = DescribePage(fake_client, channel.sender(), config)
        with pytest.raises(ValueError, match="Nothing to describe"):
            await page.initialise(AppContext())

    @pytest.mark.asyncio
    async def test_draws_sections(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_image: Callable[..., DockerImage],
    ) -> None:
        page = DescribePage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(describable=make_image(name="nginx", tag="1.25")))

        output = _render(page.draw())
        assert "nginx:1.25" in output
        assert "Summary" in output
        assert "Tag: 1.25" in output
        assert page.get_help().name == "Describe (nginx:1.25)"

    @pytest.mark.asyncio
    async def test_scroll_is_bounded(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_volume: Callable[..., DockerVolume],
    ) -> None:
        page = DescribePage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(describable=make_volume()))

        await page.update(Key.char("k"))
        assert page.scroll == 0
        for _ in range(page.line_count + 5):
            await page.update(Key.char("j"))
        assert page.scroll == page.line_count - 1

    @pytest.mark.asyncio
    async def test_esc_uses_then(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_volume: Callable[..., DockerVolume],
    ) -> None:
        then = Transition.to_network_page(AppContext())
        page = DescribePage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(describable=make_volume(), then=then))
        assert await page.update(Key.ESC) is MessageResponse.CONSUMED
        assert drain(channel) == [TransitionMessage(then)]

    @pytest.mark.asyncio
    async def test_esc_without_then_returns_to_entity_page(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_volume: Callable[..., DockerVolume],
    ) -> None:
        volume = make_volume()
        page = DescribePage(fake_client, channel.sender(), config)
        await page.initialise(AppContext(describable=volume))
        await page.update(Key.ESC)
        assert drain(channel) == [
            TransitionMessage(Transition.to_volume_page(AppContext(docker_volume=volume)))
        ]

    @pytest.mark.asyncio
    async def test_other_keys_not_consumed(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        page = DescribePage(fake_client, channel.sender(), config)
        assert await page.update(Key.char("x")) is MessageResponse.NOT_CONSUMED

    def test_default_return_per_kind(
        self,
        make_container: Callable[..., DockerContainer],
        make_image: Callable[..., DockerImage],
        make_network: Callable[..., DockerNetwork],
    ) -> None:
        container, image, network = make_container(), make_image(), make_network()
        assert default_return(container) == Transition.to_container_page(
            AppContext(docker_container=container)
        )
        assert default_return(image) == Transition.to_image_page(AppContext(docker_image=image))
        assert default_return(network) == Transition.to_network_page(
            AppContext(docker_network=network)
        )


# ============================================================================
# AttachPage
# ============================================================================


@pytest.mark.unit
class TestAttachPage:
    """Tests for the shell hand-off."""

    @pytest.mark.asyncio
    async def test_runs_shell_inside_suspend_then_navigates(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        drain: Drain,
        make_container: Callable[..., DockerContainer],
    ) -> None:
        events: list[str] = []

        @contextlib.contextmanager
        def suspend() -> Iterator[None]:
            events.append("suspend")
            yield
            events.append("resume")

        container = make_container()
        then = Transition.to_container_page(AppContext(docker_container=container))
        page = AttachPage(fake_client, channel.sender(), config, suspend=suspend)
        await page.initialise(AppContext(docker_container=container, then=then))

        assert events == ["suspend", "resume"]
        assert fake_client.called("exec_shell") == [
            ("exec_shell", container.id, config.default_exec)
        ]
        assert drain(channel) == [
            TransitionMessage(then),
            TransitionMessage(Transition.to_new_terminal()),
        ]

    @pytest.mark.asyncio
    async def test_requires_container(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        page = AttachPage(fake_client, channel.sender(), config)
        with pytest.raises(ValueError, match="attach"):
            await page.initialise(AppContext())

    @pytest.mark.asyncio
    async def test_ignores_keys(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        page = AttachPage(fake_client, channel.sender(), config)
        assert await page.update(Key.char("q")) is MessageResponse.NOT_CONSUMED
        assert page.draw().plain == "Attaching..."
