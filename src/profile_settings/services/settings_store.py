"""State container for profile settings."""

from collections.abc import Callable
from dataclasses import dataclass, field

from profile_settings.domain.settings import SettingsState

Listener = Callable[[SettingsState], None]


@dataclass
class SettingsStore:
    """Holds the current settings snapshot and replaces it on every transition.

    Updates follow a read-current, compute-next, replace-whole discipline: the
    transition function always receives the latest snapshot, so interleaved
    operations never write back stale copies of fields they did not touch.
    """

    state: SettingsState = field(default_factory=SettingsState)
    _listeners: list[Listener] = field(default_factory=list)

    def update(
        self, transition: Callable[[SettingsState], SettingsState]
    ) -> SettingsState:
        """Apply a transition to the current snapshot and publish the result."""
        self.state = transition(self.state)
        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for new snapshots and return an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_listeners(self) -> None:
        """Detach every listener."""
        self._listeners.clear()
