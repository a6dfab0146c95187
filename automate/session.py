"""Per-session command pipeline.

input -> ActionGenerator -> ConsentGate (blocks) -> approve -> executor
Every step is mirrored into the session's ConversationLog.
"""

import sys
import uuid
from datetime import datetime
from typing import Dict, Optional, Sequence

from automate.domain.catalog import SELECTABLE_AREAS, EndpointCatalog, catalog_slice, display_name
from automate.domain.commands import (
    DEFAULT_PRIORITY,
    ActionSelection,
    AnyInput,
    ImageCommand,
    resolve_input_priority,
)
from automate.domain.consent import ConsentGate
from automate.domain.conversation import ConversationLog
from automate.domain.errors import NoDomainSelectedError
from automate.domain.generator import ActionGenerator
from automate.domain.models import CallResult, ExecutionOutcome, Plan
from automate.domain.presenter import describe_outcome, describe_plan
from automate.ports.outbound import ExecutorPort


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


class CommandSession:
    """State of one AutoMate user: selected area, pending plan, conversation."""

    def __init__(
        self,
        generator: ActionGenerator,
        executor: ExecutorPort,
        catalog: EndpointCatalog,
        session_id: Optional[str] = None,
        priority: Sequence[str] = DEFAULT_PRIORITY,
    ):
        self.id = session_id or str(uuid.uuid4())[:8]
        self.generator = generator
        self.executor = executor
        self.catalog = catalog
        self.priority = priority
        self.domain_area: Optional[str] = None
        self.gate = ConsentGate()
        self.log = ConversationLog()

    def select_domain(self, domain_area: str):
        if domain_area not in SELECTABLE_AREAS:
            raise ValueError(f"unknown domain area: {domain_area}")
        self.domain_area = domain_area
        name = display_name(domain_area)
        self.log.user(f"I want to work with {name}")
        self.log.assistant(
            f"Great! I'm ready to help you with {name}. You can now use voice commands "
            f"or upload images to process your {name} operations. "
            "What specific task would you like me to help you with?"
        )

    async def submit(self, *inputs: Optional[AnyInput]) -> Optional[Plan]:
        """Generate a plan from the highest-priority input and hold it for consent.

        A bare ActionSelection switches the domain area and returns None.
        """
        command = resolve_input_priority(inputs, self.priority)
        if isinstance(command, ActionSelection):
            self.select_domain(command.domain_area)
            return None
        if self.domain_area is None:
            raise NoDomainSelectedError("select what you'd like to work with first")

        if isinstance(command, ImageCommand):
            self.log.user(f"Uploaded an image for {display_name(self.domain_area)}")
        else:
            self.log.user(command.describe())

        plan = await self.generator.generate(
            command,
            self.domain_area,
            catalog_slice(self.catalog, self.domain_area),
        )
        replaced = self.gate.propose(plan)
        if replaced is not None:
            _log(f"Session {self.id}: unresolved plan replaced by a new proposal")
        self.log.assistant(describe_plan(plan))
        return plan

    async def approve(self) -> ExecutionOutcome:
        plan = self.gate.approve()
        if plan.has_api_calls:
            try:
                outcome = await self.executor.execute(plan)
            except Exception as e:
                _log(f"Session {self.id}: executor failed: {type(e).__name__}: {e}")
                outcome = ExecutionOutcome(
                    plan=plan,
                    results=[CallResult(call=c, error=str(e) or type(e).__name__) for c in plan.api_calls],
                )
        else:
            outcome = ExecutionOutcome(plan=plan)
        self.log.assistant(describe_outcome(outcome))
        return outcome

    def discard(self) -> Optional[Plan]:
        plan = self.gate.discard()
        if plan is not None:
            self.log.assistant("Okay, I discarded that action. Nothing was executed.")
        return plan


class SessionRegistry:
    """In-memory session store keyed by session id."""

    def __init__(self, generator: ActionGenerator, executor: ExecutorPort, catalog: EndpointCatalog):
        self.generator = generator
        self.executor = executor
        self.catalog = catalog
        self._sessions: Dict[str, CommandSession] = {}

    def create(self) -> CommandSession:
        session = CommandSession(self.generator, self.executor, self.catalog)
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> CommandSession:
        return self._sessions[session_id]

    def drop(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
