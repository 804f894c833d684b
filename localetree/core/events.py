"""Payload-less change notification used between loader, provider and host."""

from __future__ import annotations

from collections.abc import Callable

Listener = Callable[[], None]


class Subscription:
    """Handle returned by `ChangeEmitter.subscribe`; `dispose()` detaches it."""

    def __init__(self, emitter: ChangeEmitter, listener: Listener) -> None:
        self._emitter: ChangeEmitter | None = emitter
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._emitter is not None

    def dispose(self) -> None:
        emitter = self._emitter
        if emitter is None:
            return
        self._emitter = None
        emitter._detach(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.dispose()


class ChangeEmitter:
    """Ordered listener registry firing a bare "changed" signal."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, listener: Listener) -> Subscription:
        sub = Subscription(self, listener)
        self._subscriptions.append(sub)
        return sub

    def _detach(self, sub: Subscription) -> None:
        try:
            self._subscriptions.remove(sub)
        except ValueError:
            return

    def fire(self) -> None:
        # snapshot: listeners may dispose themselves or others while firing
        for sub in list(self._subscriptions):
            if sub.active:
                sub._listener()
