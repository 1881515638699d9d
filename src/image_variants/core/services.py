"""Service implementations for the variant generation pipeline."""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from .error_handling import (
    BatchOperationContextManager,
    error_message,
    translate_errors,
)
from .exceptions import DecodeError, FetchError, WriteError
from .image_utils import (
    SourceImage,
    encode_webp,
    open_image,
    resize_to_width,
    to_webp_mode,
)
from .keys import classify_key, decode_notification_key, variant_key
from .models import (
    HandlerResponse,
    KeyClassification,
    OutcomeStatus,
    RecordOutcome,
    SourceObjectRef,
)
from .observability import LogContext, MetricsCollector, PerformanceMetrics
from .planner import plan_variants
from .protocols import (
    BatchProcessor,
    ImageCodecProtocol,
    LoggerProtocol,
    RecordProcessor,
    S3ClientProtocol,
)

VARIANT_CONTENT_TYPE = "image/webp"
VARIANT_CACHE_CONTROL = "public, max-age=31536000, immutable"

EMPTY_BODY_MESSAGE = "Empty response body from S3"
MALFORMED_RECORD_MESSAGE = "Malformed notification record"


class PillowImageCodec:
    """Pillow-backed codec: decode once, then resize and encode per width."""

    @translate_errors(DecodeError)
    def decode(self, data: bytes) -> SourceImage:
        """Decode source bytes into a WebP-compatible image."""
        return SourceImage(data=data, image=to_webp_mode(open_image(data)))

    @translate_errors(DecodeError)
    def resize_encode(self, source: SourceImage, width: int) -> bytes:
        """Resize ``source`` to ``width`` (never enlarging) and encode as WebP."""
        return encode_webp(resize_to_width(source.image, width))


class S3SourceFetcher:
    """Reads whole source objects from S3."""

    def __init__(self, s3_client: S3ClientProtocol, logger: LoggerProtocol):
        self._s3_client = s3_client
        self._logger = logger

    @translate_errors(FetchError)
    def fetch(self, ref: SourceObjectRef) -> bytes:
        """
        Download the object named by ``ref``.

        Raises:
            FetchError: On any client error, or when the response has no body.
        """
        response = self._s3_client.get_object(Bucket=ref.bucket, Key=ref.key)
        body = response.get("Body")
        if body is None:
            raise FetchError(EMPTY_BODY_MESSAGE)

        data = body.read()
        if not data:
            raise FetchError(EMPTY_BODY_MESSAGE)
        self._logger.debug(f"Fetched s3://{ref.bucket}/{ref.key}", size_bytes=len(data))
        return data


class S3VariantWriter:
    """Uploads encoded variants with immutable caching headers."""

    def __init__(self, s3_client: S3ClientProtocol, logger: LoggerProtocol):
        self._s3_client = s3_client
        self._logger = logger

    @translate_errors(WriteError)
    def write(self, bucket: str, key: str, data: bytes) -> None:
        """Put ``data`` at ``key``, overwriting any previous variant."""
        self._s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=data,
            ContentType=VARIANT_CONTENT_TYPE,
            CacheControl=VARIANT_CACHE_CONTROL,
        )
        self._logger.debug(f"Wrote s3://{bucket}/{key}", size_bytes=len(data))


class VariantGenerationService(RecordProcessor):
    """Runs classify, fetch, plan, transcode and write for one record."""

    def __init__(
        self,
        fetcher: S3SourceFetcher,
        codec: ImageCodecProtocol,
        writer: S3VariantWriter,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._fetcher = fetcher
        self._codec = codec
        self._writer = writer
        self._logger = logger
        self._metrics_collector = metrics_collector

    def process_record(self, ref: SourceObjectRef) -> RecordOutcome:
        """Process a single record with full error handling."""
        start_time = time.time()
        log_context = LogContext(
            operation="process_record",
            component="variant_generation_service",
        ).with_metadata(bucket=ref.bucket, key=ref.key)

        if not ref.bucket or not ref.key:
            self._logger.error(MALFORMED_RECORD_MESSAGE, log_context)
            return self._finish(
                RecordOutcome.failure(ref.key, MALFORMED_RECORD_MESSAGE), start_time
            )

        if classify_key(ref.key) is KeyClassification.SKIP:
            self._logger.info("Skipping non-image file", log_context)
            return RecordOutcome.skipped(ref.key)

        try:
            self._logger.debug("Fetching source", log_context.with_operation("fetch"))
            source = self._codec.decode(self._fetcher.fetch(ref))

            widths = plan_variants(source.width)
            self._logger.debug(
                "Planned variants",
                log_context.with_operation("plan"),
                source_width=source.width,
                source_height=source.height,
                widths=widths,
            )

            variants = []
            for width in widths:
                key = variant_key(ref.key, width)
                encoded = self._codec.resize_encode(source, width)
                self._logger.debug(
                    "Writing variant",
                    log_context.with_operation("write"),
                    variant_key=key,
                    size_bytes=len(encoded),
                )
                self._writer.write(ref.bucket, key, encoded)
                variants.append(key)

            outcome = RecordOutcome.success(ref.key, variants)
            self._logger.info(
                f"Generated {len(variants)} variant(s)",
                log_context,
                processing_time_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            outcome = RecordOutcome.failure(ref.key, error_message(e))
            self._logger.error(
                "Record processing failed", log_context.with_metadata(error=outcome.error)
            )

        return self._finish(outcome, start_time)

    def _finish(self, outcome: RecordOutcome, start_time: float) -> RecordOutcome:
        end_time = time.time()
        outcome.processing_time = end_time - start_time
        if self._metrics_collector is not None:
            self._metrics_collector.record_metric(
                PerformanceMetrics(
                    operation="process_record",
                    start_time=start_time,
                    end_time=end_time,
                    success=not outcome.failed,
                    error_message=outcome.error or None,
                    metadata={"key": outcome.key, "variants": len(outcome.variants)},
                )
            )
        return outcome


class SerialBatchProcessor(BatchProcessor):
    """Serial batch processor implementation."""

    def __init__(self, record_processor: RecordProcessor, logger: LoggerProtocol):
        self._record_processor = record_processor
        self._logger = logger

    def process_batch(self, refs: List[SourceObjectRef]) -> List[RecordOutcome]:
        """Process records one by one."""
        return [self._record_processor.process_record(ref) for ref in refs]


class ThreadedBatchProcessor(BatchProcessor):
    """Batch processor that runs records on a bounded thread pool."""

    def __init__(
        self,
        record_processor: RecordProcessor,
        logger: LoggerProtocol,
        max_workers: int = 4,
    ):
        self._record_processor = record_processor
        self._logger = logger
        self._max_workers = max_workers

    def process_batch(self, refs: List[SourceObjectRef]) -> List[RecordOutcome]:
        """Process records concurrently; outcomes keep the input order."""
        if not refs:
            return []

        max_workers = min(self._max_workers, len(refs))
        self._logger.debug(f"Processing {len(refs)} records on {max_workers} threads")

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._record_processor.process_record, ref)
                for ref in refs
            ]

            outcomes = []
            for ref, future in zip(refs, futures):
                try:
                    outcomes.append(future.result())
                except Exception as e:
                    outcomes.append(RecordOutcome.failure(ref.key, error_message(e)))

        return outcomes


def ref_from_record(record: Dict[str, Any]) -> SourceObjectRef:
    """Extract the decoded bucket and key from one notification record."""
    s3_info = record.get("s3") or {}
    bucket = (s3_info.get("bucket") or {}).get("name") or ""
    raw_key = (s3_info.get("object") or {}).get("key") or ""
    return SourceObjectRef(bucket=bucket, key=decode_notification_key(raw_key))


def build_single_response(outcome: RecordOutcome) -> HandlerResponse:
    """Response for a batch holding exactly one record."""
    if outcome.status is OutcomeStatus.SKIPPED:
        return HandlerResponse(
            body={"message": f"Skipped non-image file: {outcome.key}"}
        )
    if outcome.status is OutcomeStatus.FAILED:
        return HandlerResponse(
            status_code=500,
            body={"message": f"Failed to process {outcome.key}", "error": outcome.error},
        )
    return HandlerResponse(
        body={
            "message": f"Processed {len(outcome.variants)} variant(s) for {outcome.key}",
            "variants": list(outcome.variants),
        }
    )


def build_batch_response(outcomes: List[RecordOutcome]) -> HandlerResponse:
    """
    Response for a batch of several records.

    Failures stay isolated in their own ``results`` entry; any failure turns
    the status code into 500 so the platform may redeliver.
    """
    processed = sum(1 for o in outcomes if o.status is OutcomeStatus.SUCCESS)
    failed = sum(1 for o in outcomes if o.failed)

    message = f"Processed {processed} image(s)"
    if failed:
        message = f"{message}, {failed} error(s)"

    return HandlerResponse(
        status_code=500 if failed else 200,
        body={
            "message": message,
            "results": [o.to_result_entry() for o in outcomes],
        },
    )


class VariantPipelineOrchestrator:
    """Entry point turning a notification batch into a handler response."""

    def __init__(self, batch_processor: BatchProcessor, logger: LoggerProtocol):
        self._batch_processor = batch_processor
        self._logger = logger

    def handle_event(self, event: Dict[str, Any]) -> HandlerResponse:
        """Process every record of ``event`` and aggregate the outcomes."""
        records = (event or {}).get("Records") or []

        if not records:
            self._logger.info("No records to process")
            return HandlerResponse(body={"message": "No records to process"})

        refs = [ref_from_record(record) for record in records]

        with BatchOperationContextManager(f"Batch of {len(refs)} record(s)") as batch:
            outcomes = self._batch_processor.process_batch(refs)
            for outcome in outcomes:
                if outcome.failed:
                    batch.add_error(outcome.error, outcome.key)

        if len(outcomes) == 1:
            return build_single_response(outcomes[0])
        return build_batch_response(outcomes)
