# src/image_variants/core/error_handling.py

import functools
import logging
from typing import Any, Callable, Type, TypeVar

from botocore.exceptions import ClientError

from .exceptions import VariantPipelineError

F = TypeVar("F", bound=Callable[..., Any])


def error_message(exc: BaseException) -> str:
    """
    Return the underlying message of an exception, without wrapping.

    Botocore formats ``str(ClientError)`` as "An error occurred (Code) when
    calling ...". The service message (e.g. "Access Denied") lives in the
    response payload, so that is what gets reported.
    """
    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message")
        if message:
            return message
    return str(exc)


def translate_errors(error_cls: Type[VariantPipelineError]) -> Callable[[F], F]:
    """
    Decorator that re-raises foreign exceptions as ``error_cls``.

    Pipeline errors raised by the wrapped function pass through untouched.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = logging.getLogger(func.__module__ + "." + func.__name__)
            try:
                return func(*args, **kwargs)
            except VariantPipelineError:
                raise
            except Exception as e:
                logger.error(f"Error in '{func.__name__}': {e}", exc_info=True)
                raise error_cls(error_message(e)) from e

        return wrapper  # type: ignore[return-value]

    return decorator


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """

    def __init__(self, operation_name: str = "Batch Operation"):
        self.operation_name = operation_name
        self.errors = []
        self.logger = logging.getLogger(
            self.__class__.__module__ + "." + self.__class__.__name__
        )

    def __enter__(self):
        self.logger.info(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.error(
                    f"  Error {i + 1}/{len(self.errors)} for item "
                    f"'{error_detail['item']}': {error_detail['error']}"
                )
        elif exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        else:
            self.logger.info(f"{self.operation_name} completed successfully.")

        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item"):
        """
        Report an error for a specific item of the batch.

        Args:
            error_message: The error message.
            item_identifier: The item that failed (e.g. the object key).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(
            f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}"
        )
