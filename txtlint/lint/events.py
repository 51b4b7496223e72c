"""Node-type keyed dispatch table bridging traversal callbacks to rule handlers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, TypeAlias

from txtlint.ast import TxtNode

NodeHandler: TypeAlias = Callable[[TxtNode], None]

EXIT_SUFFIX: Final[str] = ":exit"


def exit_key(node_type: str) -> str:
    """Event key published when the traversal leaves a node of `node_type`."""
    return f"{node_type}{EXIT_SUFFIX}"


class EventDispatcher:
    """Ordered subscriber lists keyed by node type (`Str`) or exit key (`Str:exit`).

    Publishing is synchronous and in subscription order. Handler exceptions
    are not caught.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[str, list[NodeHandler]] = {}

    def subscribe(self, key: str, handler: NodeHandler) -> None:
        self._handlers.setdefault(key, []).append(handler)

    def unsubscribe(self, key: str, handler: NodeHandler) -> None:
        """Remove the most recent subscription of `handler` under `key`."""
        handlers = self._handlers.get(key)
        if not handlers:
            return
        for index in range(len(handlers) - 1, -1, -1):
            if handlers[index] is handler:
                del handlers[index]
                break
        if not handlers:
            del self._handlers[key]

    def unsubscribe_all(self) -> None:
        self._handlers.clear()

    def publish(self, key: str, node: TxtNode) -> None:
        handlers = self._handlers.get(key)
        if not handlers:
            return
        # Snapshot so handlers subscribed during publish wait for the next event.
        for handler in tuple(handlers):
            handler(node)

    def subscriber_count(self, key: str) -> int:
        return len(self._handlers.get(key, ()))

    def keys(self) -> tuple[str, ...]:
        return tuple(self._handlers)
