from typing import Optional


class ConfigurationError(ValueError):
    """Raised when a required configuration value is missing or invalid"""


class PlanCreationError(Exception):
    """Raised when the planner could not build a plan for a goal.

    Carries the prompt that was sent to the model and whatever the model
    answered, so the caller can show why planning failed.
    """

    def __init__(
        self,
        message: str,
        create_plan_prompt: Optional[str] = None,
        model_results: Optional[str] = None,
        inner_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.create_plan_prompt = create_plan_prompt
        self.model_results = model_results
        self.inner_exception = inner_exception
