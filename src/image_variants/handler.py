"""Serverless entry point for object-created notifications."""

from typing import Any, Callable, Dict

from .core.factories import PipelineFactory
from .core.models import PipelineConfig
from .core.services import VariantPipelineOrchestrator

Handler = Callable[[Dict[str, Any], Any], Dict[str, Any]]


def build_handler(orchestrator: VariantPipelineOrchestrator) -> Handler:
    """Bind ``orchestrator`` into a ``(event, context)`` handler function."""

    def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        return orchestrator.handle_event(event).to_lambda()

    return handler


# Built once per process and reused across warm invocations.
lambda_handler = build_handler(
    PipelineFactory.create_pipeline(config=PipelineConfig.from_env())
)
