"""Event vocabulary and the event loop that carries it."""

from dockside.tui.events.channel import Channel, ChannelClosedError, Sender
from dockside.tui.events.event_loop import CHANNEL_CAPACITY, TICK_RATE, EventLoop
from dockside.tui.events.input import KeyReader, QueueKeyReader
from dockside.tui.events.key import Key, KeyCode
from dockside.tui.events.message import (
    TICK,
    ErrorMessage,
    InputMessage,
    Message,
    MessageResponse,
    TickMessage,
    TransitionMessage,
)
from dockside.tui.events.transition import Transition, TransitionKind, send_transition

__all__ = [
    "CHANNEL_CAPACITY",
    "TICK",
    "TICK_RATE",
    "Channel",
    "ChannelClosedError",
    "ErrorMessage",
    "EventLoop",
    "InputMessage",
    "Key",
    "KeyCode",
    "KeyReader",
    "Message",
    "MessageResponse",
    "QueueKeyReader",
    "Sender",
    "TickMessage",
    "Transition",
    "TransitionKind",
    "TransitionMessage",
    "send_transition",
]
