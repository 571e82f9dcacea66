"""Allowed status transitions for an assessment session."""

from __future__ import annotations

from assessment_app.core.errors import InvalidTransitionError
from assessment_app.core.models import SessionStatus


class AssessmentStateMachine:
    """Tracks the session status and rejects transitions the flow does not allow.

    ``start`` is handled separately through :meth:`reset` because it is valid
    from every status, including ``FINISHED``.
    """

    _TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
        SessionStatus.IDLE: frozenset(),
        SessionStatus.IN_PROGRESS: frozenset({SessionStatus.AWAITING_ADVANCE}),
        SessionStatus.AWAITING_ADVANCE: frozenset(
            {SessionStatus.IN_PROGRESS, SessionStatus.FINISHED}
        ),
        SessionStatus.FINISHED: frozenset(),
    }

    def __init__(self) -> None:
        self.current_state = SessionStatus.IDLE

    def can_transition(self, target_state: SessionStatus) -> bool:
        return target_state in self._TRANSITIONS.get(self.current_state, frozenset())

    def require(self, operation: str, *expected: SessionStatus) -> None:
        """Raise unless the current state is one of ``expected``."""
        if self.current_state not in expected:
            raise InvalidTransitionError(operation, self.current_state)

    def transition(self, target_state: SessionStatus) -> None:
        if not self.can_transition(target_state):
            raise InvalidTransitionError(
                f"move to '{target_state.value}'", self.current_state
            )
        self.current_state = target_state

    def reset(self) -> None:
        self.current_state = SessionStatus.IN_PROGRESS

    def get_state(self) -> SessionStatus:
        return self.current_state
