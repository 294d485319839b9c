"""Unit tests for the Dashboard mode machine and the main loop."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from dockside import __version__
from dockside.core.config import Config
from dockside.integrations.docker import DockerError
from dockside.tui.apps.docker.context import AppContext
from dockside.tui.apps.docker.dashboard import Dashboard
from dockside.tui.apps.docker.page_manager import PageManager
from dockside.tui.apps.docker.runner import run_app
from dockside.tui.apps.docker.state import CurrentPage, Mode, Running
from dockside.tui.events import (
    TICK,
    Channel,
    ErrorMessage,
    InputMessage,
    Key,
    Message,
    MessageResponse,
    Transition,
    TransitionMessage,
)


async def _dashboard(client: Any, channel: Channel[Message], config: Config) -> Dashboard:
    manager = await PageManager.create(
        CurrentPage.CONTAINERS, AppContext(), client, channel.sender(), config
    )
    return Dashboard(manager, channel.sender(), config, client.base_url)


def _render(renderable: Any) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


class ScriptedEvents:
    """Replays a fixed list of messages, then quits."""

    def __init__(self, messages: list[Message]) -> None:
        self._messages = list(messages)
        self.stop = AsyncMock()

    async def next(self) -> Message:
        if self._messages:
            return self._messages.pop(0)
        return TransitionMessage(Transition.quit())


# ============================================================================
# Dashboard
# ============================================================================


@pytest.mark.unit
class TestDashboardViewMode:
    """Tests for View mode key handling."""

    @pytest.mark.asyncio
    async def test_quit_keys(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        assert await dashboard.update(Key.char("q")) is MessageResponse.CONSUMED
        assert dashboard.running is Running.DONE
        assert not dashboard.is_running

    @pytest.mark.asyncio
    async def test_colon_enters_text_input(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        assert await dashboard.update(Key.char(":")) is MessageResponse.CONSUMED
        assert dashboard.mode is Mode.TEXT_INPUT

    @pytest.mark.asyncio
    async def test_slash_enters_text_input_on_pages_without_filter(
        self,
        fake_client: Any,
        channel: Channel[Message],
        config: Config,
        make_volume: Any,
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.transition(
            Transition.to_describe_container_page(AppContext(describable=make_volume()))
        )
        assert await dashboard.update(Key.char("/")) is MessageResponse.CONSUMED
        assert dashboard.mode is Mode.TEXT_INPUT

    @pytest.mark.asyncio
    async def test_slash_opens_filter_on_list_pages(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        assert await dashboard.update(Key.char("/")) is MessageResponse.CONSUMED
        assert dashboard.mode is Mode.VIEW

    @pytest.mark.asyncio
    async def test_page_claims_keys_first(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        # Open the filter so that "q" is typed into it instead of quitting
        await dashboard.update(Key.char("/"))
        await dashboard.update(Key.char("q"))
        assert dashboard.running is Running.RUNNING

    @pytest.mark.asyncio
    async def test_unbound_key(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        assert await dashboard.update(Key.char("z")) is MessageResponse.NOT_CONSUMED

    @pytest.mark.asyncio
    async def test_page_error_opens_alert_and_alert_eats_next_key(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        fake_client.errors["list_containers"] = DockerError("engine down")

        assert await dashboard.update(Key.NULL) is MessageResponse.CONSUMED
        assert dashboard.alert.is_open
        assert dashboard.alert.message == "engine down"

        # Ticks leave the alert up; the next real key dismisses it unhandled
        await dashboard.update(Key.NULL)
        assert dashboard.alert.is_open
        assert await dashboard.update(Key.char("q")) is MessageResponse.CONSUMED
        assert not dashboard.alert.is_open
        assert dashboard.running is Running.RUNNING


@pytest.mark.unit
class TestDashboardTextInputMode:
    """Tests for TextInput mode."""

    @pytest.mark.asyncio
    async def test_esc_returns_to_view(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.update(Key.char(":"))
        await dashboard.update(Key.ESC)
        assert dashboard.mode is Mode.VIEW

    @pytest.mark.asyncio
    async def test_null_key_ignored(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.update(Key.char(":"))
        assert await dashboard.update(Key.NULL) is MessageResponse.NOT_CONSUMED
        assert dashboard.mode is Mode.TEXT_INPUT

    @pytest.mark.asyncio
    async def test_q_is_typed_not_quit(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.update(Key.char(":"))
        await dashboard.update(Key.char("q"))
        assert dashboard.running is Running.RUNNING
        assert dashboard.command_input.value == "q"

    @pytest.mark.asyncio
    async def test_draw_shows_command_line(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.update(Key.char(":"))
        await dashboard.update(Key.char("v"))
        output = _render(dashboard.draw())
        assert f"{config.prompt} v" in output


@pytest.mark.unit
class TestDashboardTransitions:
    """Tests for transition dispatch."""

    @pytest.mark.asyncio
    async def test_quit_and_view_mode(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        dashboard.mode = Mode.TEXT_INPUT
        await dashboard.transition(Transition.to_view_mode())
        assert dashboard.mode is Mode.VIEW
        await dashboard.transition(Transition.quit())
        assert dashboard.running is Running.DONE

    @pytest.mark.asyncio
    async def test_navigation_goes_to_page_manager(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.transition(Transition.to_volume_page(AppContext()))
        assert dashboard.page_manager.current is CurrentPage.VOLUMES

    @pytest.mark.asyncio
    async def test_failed_navigation_shows_alert(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        fake_client.errors["list_images"] = DockerError("permission denied")
        await dashboard.transition(Transition.to_image_page(AppContext()))
        assert dashboard.alert.message == "permission denied"
        assert dashboard.page_manager.current is CurrentPage.CONTAINERS

    @pytest.mark.asyncio
    async def test_draw_header_and_footer(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        output = _render(dashboard.draw())
        assert output.startswith("dockside v")
        assert fake_client.base_url in output
        assert "Press : to enter a command" in output
        assert "Containers:" in output


@pytest.mark.unit
class TestDashboardUpdateCheck:
    """Tests for the release check shown in the header."""

    @pytest.mark.asyncio
    async def test_newer_release_redraws_header(
        self, fake_client: Any, channel: Channel[Message], config: Config, drain: Any
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        await dashboard.check_for_update(lambda current: "99.0.0")

        assert dashboard.update_to == "99.0.0"
        assert drain(channel) == [TICK]
        assert f"dockside v{__version__} > v99.0.0" in _render(dashboard.draw())

    @pytest.mark.asyncio
    async def test_no_release_sends_nothing(
        self, fake_client: Any, channel: Channel[Message], config: Config, drain: Any
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        lookup = MagicMock(return_value=None)
        await dashboard.check_for_update(lookup)

        lookup.assert_called_once_with(__version__)
        assert dashboard.update_to is None
        assert drain(channel) == []
        assert " > " not in _render(dashboard.draw()).splitlines()[0]


# ============================================================================
# run_app
# ============================================================================


@pytest.mark.unit
class TestRunApp:
    """Tests for the main loop."""

    @pytest.mark.asyncio
    async def test_quit_key_ends_loop(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        events = ScriptedEvents([TICK, InputMessage(Key.char("q"))])
        render = MagicMock()

        await run_app(dashboard, events, render, MagicMock())  # type: ignore[arg-type]

        assert not dashboard.is_running
        assert render.call_count == 2
        events.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unconsumed_ctrl_c_exits(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        events = ScriptedEvents([InputMessage(Key.ctrl("c")), InputMessage(Key.char(":"))])

        await run_app(dashboard, events, MagicMock(), MagicMock())  # type: ignore[arg-type]

        assert dashboard.mode is Mode.VIEW
        events.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_error_message_opens_alert(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        frames: list[str] = []
        events = ScriptedEvents([ErrorMessage("stop failed"), TICK])

        await run_app(
            dashboard,
            events,  # type: ignore[arg-type]
            lambda frame: frames.append(_render(frame)),
            MagicMock(),
        )
        assert dashboard.alert.message == "stop failed"
        assert "stop failed" in frames[1]
        assert "Press any key to continue..." in frames[1]

    @pytest.mark.asyncio
    async def test_new_terminal_resets_and_navigation_applies(
        self, fake_client: Any, channel: Channel[Message], config: Config
    ) -> None:
        dashboard = await _dashboard(fake_client, channel, config)
        reset = MagicMock()
        events = ScriptedEvents(
            [
                TransitionMessage(Transition.to_network_page(AppContext())),
                TransitionMessage(Transition.to_new_terminal()),
            ]
        )

        await run_app(dashboard, events, MagicMock(), reset)  # type: ignore[arg-type]

        reset.assert_called_once()
        assert dashboard.page_manager.current is CurrentPage.NETWORK
