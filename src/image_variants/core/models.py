"""Shared data models for the image variants pipeline."""

import json
import os
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError


class PipelineConfig(BaseModel):
    """Runtime configuration for the worker process."""

    region: str = "us-east-1"
    log_level: str = "INFO"
    log_format: str = "structured"
    max_workers: int = Field(default=1, ge=1)

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build the configuration from environment variables."""
        try:
            return cls(
                region=os.getenv("AWS_REGION", "us-east-1"),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
                log_format=os.getenv("LOG_FORMAT", "structured").lower(),
                max_workers=int(os.getenv("MAX_WORKERS", "1")),
            )
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(f"Invalid pipeline configuration: {e}") from e


class SourceObjectRef(BaseModel):
    """A storage object named by a notification record (key already decoded)."""

    bucket: str
    key: str


class KeyClassification(str, Enum):
    """Decision taken for a notification key."""

    PROCESS = "process"
    SKIP = "skip"


class OutcomeStatus(str, Enum):
    """Terminal state of a single record."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class RecordOutcome(BaseModel):
    """Result of processing a single notification record."""

    key: str
    status: OutcomeStatus
    variants: List[str] = Field(default_factory=list)
    error: str = ""
    processing_time: float = 0.0

    @classmethod
    def success(cls, key: str, variants: List[str], processing_time: float = 0.0):
        return cls(
            key=key,
            status=OutcomeStatus.SUCCESS,
            variants=variants,
            processing_time=processing_time,
        )

    @classmethod
    def skipped(cls, key: str):
        return cls(key=key, status=OutcomeStatus.SKIPPED)

    @classmethod
    def failure(cls, key: str, error: str, processing_time: float = 0.0):
        return cls(
            key=key,
            status=OutcomeStatus.FAILED,
            error=error,
            processing_time=processing_time,
        )

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED

    def to_result_entry(self) -> Dict[str, Any]:
        """Per-record entry of a multi-record response body."""
        if self.status is OutcomeStatus.SKIPPED:
            return {"key": self.key, "skipped": True}
        if self.status is OutcomeStatus.FAILED:
            return {"key": self.key, "error": self.error}
        return {"key": self.key, "variants": list(self.variants)}


class HandlerResponse(BaseModel):
    """Structured response returned to the invoking platform."""

    status_code: int = 200
    body: Dict[str, Any] = Field(default_factory=dict)

    def to_lambda(self) -> Dict[str, Any]:
        """Serialize to the ``{statusCode, body}`` shape with a JSON body."""
        return {"statusCode": self.status_code, "body": json.dumps(self.body)}
