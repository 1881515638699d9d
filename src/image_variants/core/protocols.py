"""Protocol definitions for dependency injection and testability."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Protocol

from .image_utils import SourceImage
from .models import RecordOutcome, SourceObjectRef


class S3ClientProtocol(Protocol):
    """Protocol for the S3 client operations the pipeline issues."""

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        """Get object from S3."""
        ...

    def put_object(
        self,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        CacheControl: str,
    ) -> Dict[str, Any]:
        """Put object to S3."""
        ...


class ImageCodecProtocol(Protocol):
    """Protocol for decoding a source once and deriving encoded variants."""

    def decode(self, data: bytes) -> SourceImage:
        """Decode source bytes."""
        ...

    def resize_encode(self, source: SourceImage, width: int) -> bytes:
        """Resize the decoded source to ``width`` and encode it."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None:
        """Log error message."""
        ...


class RecordProcessor(ABC):
    """Abstract processor for a single notification record."""

    @abstractmethod
    def process_record(self, ref: SourceObjectRef) -> RecordOutcome:
        """Process one record into its outcome. Must not raise."""
        ...


class BatchProcessor(ABC):
    """Abstract batch processor."""

    @abstractmethod
    def process_batch(self, refs: List[SourceObjectRef]) -> List[RecordOutcome]:
        """Process records, returning outcomes in input order."""
        ...
