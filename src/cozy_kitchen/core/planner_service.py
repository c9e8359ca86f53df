import asyncio
import logging
from typing import Callable, Optional

from ..plugins import PROMPT_PLUGINS, GraphUserProfileSkillsPlugin, MyIpAddressPlugin, UniversityFinderPlugin
from ..ui import ConsoleIO
from .config import Config
from .context import PlannerContext
from .graph_client import get_graph_service_client
from .planner import (
    HandlebarsPlanner,
    HandlebarsPlannerOptions,
    PlanCreated,
    PlanCreationFailed,
    try_create_plan,
)

logger = logging.getLogger(__name__)


class PlannerHostedService:
    """Interactive console that turns requests into plans and runs them"""

    def __init__(
        self,
        context: PlannerContext,
        console: Optional[ConsoleIO] = None,
        graph_client_factory: Callable[[Config], object] = get_graph_service_client,
    ):
        self.context = context
        self.console = console or ConsoleIO()
        self.graph_client_factory = graph_client_factory

        for plugin_name in PROMPT_PLUGINS:
            self.context.import_prompt_plugin(plugin_name)

    async def start(self, stopping: Optional[asyncio.Event] = None):
        """Register native plugins, then run the planning loop until the user quits"""
        graph_client = self.graph_client_factory(self.context.config)

        # adding native plugins
        http_factory = self.context.http_client_factory
        self.context.add_native_plugin(GraphUserProfileSkillsPlugin(graph_client), "GraphSkillsPlugin")
        self.context.add_native_plugin(MyIpAddressPlugin(http_factory.create_client()))
        self.context.add_native_plugin(UniversityFinderPlugin(http_factory.create_client()))

        exit_requested = False
        while not exit_requested:
            self.console.write("How can I help:")
            ask = await self.console.read_line()
            if ask is None:
                logger.info("Console input closed, leaving planning loop")
                break

            await self._handle_ask(ask, stopping)

            self.console.write("\n\nDo you want to continue? (Y/N)")
            response = await self.console.read_line()
            exit_requested = response is None or response.upper() != "Y"

    async def _handle_ask(self, ask: str, stopping: Optional[asyncio.Event]):
        planner = HandlebarsPlanner(HandlebarsPlannerOptions(allow_loops=self.context.config.allow_loops))
        kernel = self.context.kernel

        outcome = await try_create_plan(planner, kernel, ask)
        if isinstance(outcome, PlanCreationFailed):
            self.console.write(outcome.describe())
            return

        assert isinstance(outcome, PlanCreated)
        self.console.write("Plan:\n")
        self.console.write(outcome.plan.to_json(indent=2))

        result = await outcome.plan.invoke(kernel, stopping=stopping)
        self.console.write("Plan results:\n")
        self.console.write(result)

    async def stop(self):
        logger.warning("HostedService Stopped")
