"""Use cases: planning runs and dispatching their results."""

from .run_orchestrator import (
    Dispatcher,
    RenderDispatcher,
    RunSummary,
    UploadDispatcher,
    check_dependencies,
    iter_plans,
    run,
    validate_inputs,
)

__all__ = [
    "Dispatcher",
    "RenderDispatcher",
    "RunSummary",
    "UploadDispatcher",
    "check_dependencies",
    "iter_plans",
    "run",
    "validate_inputs",
]
