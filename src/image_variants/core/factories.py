"""Factory classes for creating configured service instances."""

from typing import TYPE_CHECKING, Optional

import boto3

from .models import PipelineConfig
from .observability import MetricsCollector, StructuredLogger
from .protocols import ImageCodecProtocol, LoggerProtocol, S3ClientProtocol
from .services import (
    PillowImageCodec,
    S3SourceFetcher,
    S3VariantWriter,
    SerialBatchProcessor,
    ThreadedBatchProcessor,
    VariantGenerationService,
    VariantPipelineOrchestrator,
)

if TYPE_CHECKING:
    from mypy_boto3_s3.client import S3Client


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(config: PipelineConfig) -> LoggerProtocol:
        """Create a structured logger honouring the configured level and format."""
        return StructuredLogger(
            "image-variants", level=config.log_level, format_type=config.log_format
        )


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(region: str) -> "S3Client":
        """Create an S3 client bound to ``region``."""
        session = boto3.Session()
        return session.client("s3", region_name=region)


class PipelineFactory:
    """Factory for creating the complete variant pipeline."""

    @staticmethod
    def create_pipeline(
        config: Optional[PipelineConfig] = None,
        s3_client: Optional[S3ClientProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        codec: Optional[ImageCodecProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> VariantPipelineOrchestrator:
        """Create a fully wired orchestrator, building defaults for missing parts."""
        if config is None:
            config = PipelineConfig()

        if s3_client is None:
            s3_client = S3ClientFactory.create_s3_client(config.region)

        if logger is None:
            logger = LoggerFactory.create_logger(config)

        if codec is None:
            codec = PillowImageCodec()

        record_processor = VariantGenerationService(
            fetcher=S3SourceFetcher(s3_client, logger),
            codec=codec,
            writer=S3VariantWriter(s3_client, logger),
            logger=logger,
            metrics_collector=metrics_collector,
        )

        if config.max_workers > 1:
            batch_processor = ThreadedBatchProcessor(
                record_processor, logger, max_workers=config.max_workers
            )
        else:
            batch_processor = SerialBatchProcessor(record_processor, logger)

        return VariantPipelineOrchestrator(batch_processor=batch_processor, logger=logger)
