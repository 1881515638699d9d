"""Core components of the image variants pipeline."""

from .exceptions import (
    VariantPipelineError,
    FetchError,
    DecodeError,
    WriteError,
    ConfigurationError,
)
from .keys import classify_key, decode_notification_key, strip_extension, variant_key
from .logging_config import get_logger, setup_logger
from .models import (
    HandlerResponse,
    KeyClassification,
    OutcomeStatus,
    PipelineConfig,
    RecordOutcome,
    SourceObjectRef,
)
from .planner import BREAKPOINTS, plan_variants

__all__ = [
    "PipelineConfig",
    "SourceObjectRef",
    "KeyClassification",
    "OutcomeStatus",
    "RecordOutcome",
    "HandlerResponse",
    "BREAKPOINTS",
    "plan_variants",
    "classify_key",
    "decode_notification_key",
    "strip_extension",
    "variant_key",
    "setup_logger",
    "get_logger",
    "VariantPipelineError",
    "FetchError",
    "DecodeError",
    "WriteError",
    "ConfigurationError",
]
