"""
Handlebars planner on top of Semantic Kernel.

The model is asked to answer a goal with a Handlebars template whose helpers
are the kernel's functions; executing the plan renders that template with
Semantic Kernel's own Handlebars engine.
"""

import asyncio
import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, List, Optional, Union

from semantic_kernel import Kernel
from semantic_kernel.connectors.ai.chat_completion_client_base import ChatCompletionClientBase
from semantic_kernel.contents import ChatHistory
from semantic_kernel.functions import KernelArguments
from semantic_kernel.prompt_template import HandlebarsPromptTemplate, PromptTemplateConfig

from .exceptions import PlanCreationError

logger = logging.getLogger(__name__)

TEMPLATE_BLOCK = re.compile(r"```\s*(?:handlebars|hbs)?\s*\n(.*?)```", re.DOTALL | re.IGNORECASE)
INSUFFICIENT_FUNCTIONS = "Additional helpers or information may be required"


@dataclass
class HandlebarsPlannerOptions:
    """Knobs for plan generation"""

    allow_loops: bool = True


@dataclass
class HandlebarsPlan:
    """A plan: the Handlebars template produced by the model"""

    template: str
    prompt: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "HandlebarsPlan":
        data = json.loads(text)
        return cls(template=data["template"], prompt=data.get("prompt"))

    async def invoke(
        self,
        kernel: Kernel,
        arguments: Optional[KernelArguments] = None,
        stopping: Optional[asyncio.Event] = None,
    ) -> str:
        """Run the plan by rendering its template against the kernel.

        If `stopping` is set before or while the plan runs, rendering is
        cancelled and asyncio.CancelledError is raised.
        """
        template = HandlebarsPromptTemplate(
            prompt_template_config=PromptTemplateConfig(
                name="HandlebarsPlan",
                template=self.template,
                template_format="handlebars",
            ),
            allow_dangerously_set_content=True,
        )
        render = template.render(kernel, arguments or KernelArguments())

        if stopping is None:
            result = await render
        else:
            result = await _run_until_stopped(render, stopping)
        return result.strip()

    def __str__(self) -> str:
        return self.template


async def _run_until_stopped(coro, stopping: asyncio.Event) -> Any:
    if stopping.is_set():
        coro.close()
        raise asyncio.CancelledError("Plan execution cancelled")

    task = asyncio.ensure_future(coro)
    waiter = asyncio.ensure_future(stopping.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task not in done:
        task.cancel()
        raise asyncio.CancelledError("Plan execution cancelled")
    return task.result()


class HandlebarsPlanner:
    """Creates Handlebars plans for a goal using the kernel's chat service"""

    def __init__(self, options: Optional[HandlebarsPlannerOptions] = None):
        self.options = options or HandlebarsPlannerOptions()

    async def create_plan(self, kernel: Kernel, goal: str) -> HandlebarsPlan:
        """Ask the model for a plan; raises PlanCreationError on failure"""
        prompt = self.build_prompt(kernel, goal)
        model_results = None

        try:
            service = kernel.get_service(type=ChatCompletionClientBase)
            settings = service.get_prompt_execution_settings_class()()

            chat_history = ChatHistory()
            chat_history.add_user_message(prompt)
            reply = await service.get_chat_message_content(chat_history=chat_history, settings=settings)
            model_results = reply.content if reply is not None else None

            template = self.parse_template(model_results)
        except Exception as e:
            logger.error(f"Plan creation failed: {e}")
            raise PlanCreationError(
                "CreatePlan failed. See inner exception for details.",
                create_plan_prompt=prompt,
                model_results=model_results,
                inner_exception=e,
            ) from e

        logger.info(f"Plan created for goal ({len(template)} chars of template)")
        return HandlebarsPlan(template=template, prompt=prompt)

    @staticmethod
    def parse_template(model_results: Optional[str]) -> str:
        """Pull the Handlebars block out of the model's answer"""
        if not model_results:
            raise ValueError("The model returned an empty response")
        if INSUFFICIENT_FUNCTIONS in model_results:
            raise ValueError(
                "[InsufficientFunctionsForGoal] Unable to create plan for goal with available functions"
            )

        match = TEMPLATE_BLOCK.search(model_results)
        if not match or not match.group(1).strip():
            raise ValueError("Could not find the plan in the results")
        return match.group(1).strip()

    def build_prompt(self, kernel: Kernel, goal: str) -> str:
        """Compose the plan-creation prompt from the kernel's functions"""
        sections = [
            "## Instructions",
            "Create a Handlebars template that achieves the goal below using only the "
            "helpers listed under 'Available helpers'. Each helper is a function named "
            "`Plugin-Function`; call it with named arguments, e.g. "
            "`{{TravelAgentPlugin-SuggestDestinations input=\"beaches\"}}`.",
            "Use `{{set \"name\" value}}` to keep an intermediate result and "
            "`{{get \"name\"}}` to read it back. Print the final answer with `{{json value}}` "
            "or by emitting the value directly.",
        ]
        if self.options.allow_loops:
            sections.append(
                "You may use `{{#each}}` to iterate over arrays and `{{#if}}` for conditions."
            )
        else:
            sections.append("Do not use loops such as `{{#each}}`; `{{#if}}` is allowed.")
        sections.append(
            f"If the goal cannot be achieved with the available helpers, answer only with: "
            f"\"{INSUFFICIENT_FUNCTIONS}\"."
        )

        sections.append("")
        sections.append("## Available helpers")
        sections.extend(self._describe_functions(kernel))

        sections.append("")
        sections.append("## Goal")
        sections.append(goal)

        sections.append("")
        sections.append("Answer with the template in a single ```handlebars``` code block.")
        return "\n".join(sections)

    @staticmethod
    def _describe_functions(kernel: Kernel) -> List[str]:
        lines = []
        for metadata in kernel.get_full_list_of_function_metadata():
            lines.append(f"### `{metadata.fully_qualified_name}`")
            if metadata.description:
                lines.append(f"Description: {metadata.description}")
            for param in metadata.parameters or []:
                required = "required" if param.is_required else "optional"
                type_name = param.type_ or "string"
                lines.append(f"- `{param.name}` ({type_name}, {required}): {param.description or ''}")
            return_parameter = getattr(metadata, "return_parameter", None)
            if return_parameter is not None and return_parameter.description:
                lines.append(f"Returns: {return_parameter.description}")
            lines.append("")
        if not lines:
            lines.append("(no helpers registered)")
        return lines


@dataclass(frozen=True)
class PlanCreated:
    plan: HandlebarsPlan


@dataclass(frozen=True)
class PlanCreationFailed:
    """Why planning failed: inner error message, prompt sent, model output"""

    message: Optional[str]
    prompt: Optional[str]
    model_results: Optional[str]

    def describe(self) -> str:
        return (
            f"Error: {self.message or ''}\n"
            f" Prompt: {self.prompt or ''}\n"
            f" ModelResults: {self.model_results or ''}"
        )


PlanOutcome = Union[PlanCreated, PlanCreationFailed]


async def try_create_plan(planner: HandlebarsPlanner, kernel: Kernel, goal: str) -> PlanOutcome:
    """Create a plan, turning PlanCreationError into a PlanCreationFailed value"""
    try:
        plan = await planner.create_plan(kernel, goal)
    except PlanCreationError as e:
        inner = e.inner_exception
        return PlanCreationFailed(
            message=str(inner) if inner is not None else None,
            prompt=e.create_plan_prompt,
            model_results=e.model_results,
        )
    return PlanCreated(plan)
