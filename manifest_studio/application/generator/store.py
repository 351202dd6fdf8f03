"""Generator store - single state record behind a commit-only interface."""

import logging
from collections.abc import Callable

from manifest_studio.domain.entities.generator_state import GeneratorState
from manifest_studio.domain.entities.mutations import Mutation, apply_mutation

logger = logging.getLogger(__name__)

Listener = Callable[[Mutation, GeneratorState], None]


class GeneratorStore:
    """Holds the workflow state; `commit` is the only way to change it.

    Commits are synchronous, so two mutations never interleave. Listeners
    are called after every commit (UI re-render hook).
    """

    def __init__(self, state: GeneratorState | None = None) -> None:
        self._state = state or GeneratorState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> GeneratorState:
        return self._state

    def commit(self, mutation: Mutation) -> None:
        """Apply a mutation and notify listeners."""
        apply_mutation(self._state, mutation)
        logger.debug("Committed %s", mutation.kind.value)
        for listener in list(self._listeners):
            try:
                listener(mutation, self._state)
            except Exception:
                logger.warning("Store listener failed on %s", mutation.kind.value, exc_info=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> GeneratorState:
        """Deep copy of the current state."""
        return self._state.model_copy(deep=True)
