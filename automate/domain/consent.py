"""Consent gate: single-slot holder for the plan awaiting approval.

States: Empty -> Pending(plan) -> Empty
A new proposal replaces whatever is pending; there is no queue.
Not safe for concurrent callers; use one gate per session.
"""

from dataclasses import dataclass
from typing import Optional, Union

from automate.domain.errors import NoPendingPlanError
from automate.domain.models import Plan


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Pending:
    plan: Plan


GateState = Union[Empty, Pending]


class ConsentGate:
    def __init__(self):
        self._state: GateState = Empty()

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def has_pending(self) -> bool:
        return isinstance(self._state, Pending)

    @property
    def pending(self) -> Optional[Plan]:
        state = self._state
        return state.plan if isinstance(state, Pending) else None

    def propose(self, plan: Plan) -> Optional[Plan]:
        """Store ``plan`` as pending. Returns the plan it replaced, if any."""
        replaced = self.pending
        self._state = Pending(plan)
        return replaced

    def approve(self) -> Plan:
        state = self._state
        if not isinstance(state, Pending):
            raise NoPendingPlanError("no plan is waiting for approval")
        self._state = Empty()
        return state.plan

    def discard(self) -> Optional[Plan]:
        """Clear the slot. Returns the discarded plan, or None if it was empty."""
        discarded = self.pending
        self._state = Empty()
        return discarded
