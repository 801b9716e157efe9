"""Event emitter with wildcard listeners and bubbling to a parent emitter."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping
from typing import Any, Callable, Hashable

from pyemitter.config import Config, ConfigType

Listener = Callable[..., Any]


class InvalidArgument(TypeError):
    """Raised when a listener is not callable or a propagation target can't emit."""


def _ensure_callable(listener: Any) -> None:
    if not callable(listener):
        raise InvalidArgument('"listener" argument must be callable')


class _OnceWrapper:
    """Calls the wrapped listener on the first invocation only, then unregisters itself."""

    def __init__(self, emitter: Emitter, event_name: Hashable, listener: Listener) -> None:
        self.emitter = emitter
        self.event_name = event_name
        self.listener = listener
        self.fired = False

    def __call__(self, *args, **kwargs) -> None:
        # Stale snapshots of an outer emit may still hold this wrapper
        if self.fired:
            return
        self.fired = True
        self.emitter.off(self.event_name, self)
        self.listener(*args, **kwargs)


class Emitter:
    """Synchronous event emitter, meant to be inherited or held as an attribute.

    Listeners run in registration order. ``emit`` iterates over a snapshot of the
    listener list, so listeners added or removed while an event is being dispatched
    only take effect on the next emit.

    After the listeners of the event itself, wildcard listeners are called with
    ``(event_name, args)`` only, keyword arguments are not passed to them. The event
    is then re-emitted on the parent set with ``propagate``, its name prefixed with
    the propagation prefix.

    Listener exceptions bubble up to the caller of ``emit`` unless the emitter was
    built with ``ConfigType.ISOLATED``, in which case they are logged and the
    remaining listeners still run.
    """

    def __init__(self, config: type[Config] | ConfigType = Config) -> None:
        if isinstance(config, ConfigType):
            config = config.value
        self._config = config
        self._listeners: dict[Hashable, list[Listener]] = {}
        self._parent: Callable[[], Any] | None = None
        self._parent_prefix = ""

    @property
    def parent(self) -> Any:
        """The emitter events bubble to, or None."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def parent_prefix(self) -> str:
        return self._parent_prefix

    def on(
        self, event_name: Hashable | Mapping[Hashable, Listener], listener: Listener | None = None
    ) -> Emitter:
        """Register a listener for an event.

        Args:
            event_name: Name of the event, or a mapping of event names to listeners
                to register several at once.
            listener: Callable invoked with the emitted arguments. Ignored when
                ``event_name`` is a mapping.

        Returns:
            Emitter: this emitter, for chaining.

        Raises:
            InvalidArgument: If a listener is not callable. Nothing is registered.
        """
        if isinstance(event_name, Mapping):
            for each in event_name.values():
                _ensure_callable(each)
            for name, each in event_name.items():
                self.on(name, each)
            return self

        _ensure_callable(listener)
        self._listeners.setdefault(event_name, []).append(listener)
        logging.debug(f"Listener added for event: {event_name!r}")
        return self

    def off(self, event_name: Hashable, listener: Listener) -> Emitter:
        """Remove every registration of ``listener`` for ``event_name``.

        One-shot registrations made through ``once`` are removed too when given the
        original listener. Does nothing if the listener isn't registered.
        """
        _ensure_callable(listener)
        listeners = self._listeners.get(event_name)
        if not listeners:
            return self

        remaining = [
            each
            for each in listeners
            if each is not listener
            and not (isinstance(each, _OnceWrapper) and each.listener is listener)
        ]
        if len(remaining) == len(listeners):
            return self

        if remaining:
            self._listeners[event_name] = remaining
        else:
            del self._listeners[event_name]
        logging.debug(f"Listener removed for event: {event_name!r}")
        return self

    def once(self, event_name: Hashable, listener: Listener) -> Emitter:
        """Register a listener that is removed right before its first call."""
        _ensure_callable(listener)
        return self.on(event_name, _OnceWrapper(self, event_name, listener))

    def emit(self, event_name: Hashable, *args, **kwargs) -> Emitter:
        """Call the listeners of an event, then the wildcard listeners, then bubble up."""
        wildcard = self._config.WILDCARD

        for listener in list(self._listeners.get(event_name, ())):
            self._call(event_name, listener, args, kwargs)

        if event_name != wildcard:
            for listener in list(self._listeners.get(wildcard, ())):
                self._call(wildcard, listener, (event_name, list(args)), {})

        parent = self.parent
        if parent is not None:
            parent.emit(self._parent_name(event_name), *args, **kwargs)

        return self

    def _call(self, event_name: Hashable, listener: Listener, args: tuple, kwargs: dict) -> None:
        if not self._config.ISOLATE_LISTENER_ERRORS:
            listener(*args, **kwargs)
            return
        try:
            listener(*args, **kwargs)
        except Exception:
            logging.exception(f"Listener {listener!r} failed for event: {event_name!r}")

    def _parent_name(self, event_name: Hashable) -> Hashable:
        if not self._parent_prefix:
            return event_name
        return f"{self._parent_prefix}{event_name}"

    def has_listeners(self, event_name: Hashable) -> bool:
        return bool(self._listeners.get(event_name))

    def listeners(self, event_name: Hashable) -> list[Listener]:
        """Get a copy of the listeners registered for an event, in call order."""
        return [
            each.listener if isinstance(each, _OnceWrapper) else each
            for each in self._listeners.get(event_name, ())
        ]

    def propagate(self, parent: Any, prefix: str = "") -> Emitter:
        """Re-emit every event of this emitter on ``parent``.

        The parent is held by weak reference when possible, so a child never keeps
        its parent alive.

        Args:
            parent: Any object with an ``emit(event_name, *args, **kwargs)`` method.
            prefix: Prepended to event names on the parent, e.g. ``"user-"`` turns
                ``logout`` into ``user-logout``.

        Raises:
            InvalidArgument: If ``parent`` has no callable ``emit``, or if its own
                parent chain leads back to this emitter.
        """
        if parent is None or not callable(getattr(parent, "emit", None)):
            raise InvalidArgument('"parent" argument must implement an "emit" method')
        node = parent
        while isinstance(node, Emitter):
            if node is self:
                raise InvalidArgument("propagating to this parent would create a cycle")
            node = node.parent

        try:
            self._parent = weakref.ref(parent)
        except TypeError:
            self._parent = lambda: parent
        self._parent_prefix = prefix or ""
        logging.debug(f"Propagating events to {parent!r} with prefix {self._parent_prefix!r}")
        return self

    def stop_propagation(self) -> None:
        self._parent = None
        self._parent_prefix = ""
