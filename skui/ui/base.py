from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from skui.utils.logger import get_logger

EventHandler = Callable[..., Any]


class Base:
    """Common ancestor for windows and controls.

    Subclasses declare the events they raise in ``EVENTS``. Declarations are
    inherited, so a subclass only lists the events it adds. Handlers receive
    the object that raised the event followed by the event arguments.
    """

    EVENTS: Tuple[str, ...] = ()

    def __init__(self) -> None:
        super().__init__()
        self._handlers: Dict[str, List[EventHandler]] = {}
        self.log = get_logger(f"{__name__}.{type(self).__name__}")

    @classmethod
    def defined_events(cls) -> FrozenSet[str]:
        names = set()
        for klass in cls.__mro__:
            names.update(klass.__dict__.get("EVENTS", ()))
        return frozenset(names)

    def on(self, event: str, handler: Optional[EventHandler] = None):
        """Register ``handler`` for ``event``. Without a handler acts as decorator."""
        if event not in self.defined_events():
            raise ValueError(f"{type(self).__name__} does not define event {event!r}")

        def register(func: EventHandler) -> EventHandler:
            self._handlers.setdefault(event, []).append(func)
            return func

        if handler is None:
            return register
        return register(handler)

    def trigger_event(self, event: str, *args: Any) -> bool:
        if event not in self.defined_events():
            self.log.debug("ignoring undefined event %s", event, extra={"source": "events"})
            return False
        handlers = list(self._handlers.get(event, ()))
        for handler in handlers:
            handler(self, *args)
        return bool(handlers)

    def release_events(self) -> None:
        self._handlers.clear()
