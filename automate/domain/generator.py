"""ActionGenerator: command -> plan via the language model.

No framework dependencies; the model is reached through LLMPort.
"""

import sys
from datetime import datetime
from typing import TYPE_CHECKING, Union

from automate.domain.catalog import EndpointCatalog
from automate.domain.commands import CommandInput, ImageCommand, TextCommand, VoiceCommand
from automate.domain.errors import GenerationError, SchemaCoercionError
from automate.domain.models import ActionPlan, ImagePlan
from automate.domain.plan_parser import (
    fallback_action_plan,
    fallback_image_plan,
    parse_action_plan,
    parse_image_plan,
)
from automate.domain.prompts import build_command_directive, build_image_directive

if TYPE_CHECKING:
    from automate.ports.outbound import LLMPort


def _log(msg: str):
    print(f"[{datetime.now().isoformat()}] {msg}", file=sys.stderr)


class ActionGenerator:
    """Turns one CommandInput into an ActionPlan or ImagePlan.

    Every failure (model unreachable, bad envelope, unparsable output)
    degrades to the matching fallback plan; generate() does not raise.
    """

    def __init__(self, llm: "LLMPort"):
        self.llm = llm

    async def generate(
        self,
        command: CommandInput,
        domain_area: str,
        catalog: EndpointCatalog,
    ) -> Union[ActionPlan, ImagePlan]:
        if isinstance(command, ImageCommand):
            return await self._generate_image(command, domain_area, catalog)
        if isinstance(command, VoiceCommand):
            instruction, source = command.transcript, "voice"
        elif isinstance(command, TextCommand):
            instruction, source = command.content, "text"
        else:
            _log(f"Unsupported command input: {type(command).__name__}")
            return fallback_action_plan()

        directive = build_command_directive(instruction, domain_area, catalog, source=source)
        try:
            raw = await self.llm.generate([directive])
            plan = parse_action_plan(raw)
        except GenerationError as e:
            _log(f"Generation failed: {e}")
            return fallback_action_plan()
        except SchemaCoercionError as e:
            _log(f"Failed to parse model response: {e}")
            return fallback_action_plan()
        except Exception as e:
            _log(f"Unexpected generator error: {type(e).__name__}: {e}")
            return fallback_action_plan()

        _log(f"Plan: intent={plan.intent!r} action={plan.action!r} calls={len(plan.api_calls)}")
        return plan

    async def _generate_image(
        self,
        command: ImageCommand,
        domain_area: str,
        catalog: EndpointCatalog,
    ) -> ImagePlan:
        directive = build_image_directive(domain_area, catalog)
        try:
            raw = await self.llm.generate([directive, command])
            plan = parse_image_plan(raw)
        except GenerationError as e:
            _log(f"Image generation failed: {e}")
            return fallback_image_plan()
        except SchemaCoercionError as e:
            _log(f"Failed to parse image analysis: {e}")
            return fallback_image_plan()
        except Exception as e:
            _log(f"Unexpected generator error: {type(e).__name__}: {e}")
            return fallback_image_plan()

        _log(f"Image plan: calls={len(plan.api_calls)} suggestions={len(plan.suggested_actions)}")
        return plan
