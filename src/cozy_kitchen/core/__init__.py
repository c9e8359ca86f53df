from .config import Config
from .context import PlannerContext, build_kernel
from .exceptions import ConfigurationError, PlanCreationError
from .planner import (
    HandlebarsPlan,
    HandlebarsPlanner,
    HandlebarsPlannerOptions,
    PlanCreated,
    PlanCreationFailed,
    try_create_plan,
)
from .planner_service import PlannerHostedService

__all__ = [
    'Config',
    'PlannerContext',
    'build_kernel',
    'ConfigurationError',
    'PlanCreationError',
    'HandlebarsPlan',
    'HandlebarsPlanner',
    'HandlebarsPlannerOptions',
    'PlanCreated',
    'PlanCreationFailed',
    'try_create_plan',
    'PlannerHostedService',
]
