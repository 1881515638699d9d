"""Key classification and derived key naming."""

from urllib.parse import unquote

from .models import KeyClassification

SOURCE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})

# Variants are written back into the watched bucket, so their own
# notifications must never be processed.
VARIANT_EXTENSION = ".webp"


def decode_notification_key(raw_key: str) -> str:
    """
    Decode an object key as delivered in a storage notification.

    Notification keys are form-encoded: ``+`` stands for a space and
    everything else is percent-escaped.
    """
    return unquote(raw_key.replace("+", " "))


def get_extension(key: str) -> str:
    """Return the final extension of ``key``, lowercased and with the dot."""
    last_dot = key.rfind(".")
    if last_dot == -1:
        return ""
    return key[last_dot:].lower()


def strip_extension(key: str) -> str:
    """Strip only the final extension: ``a.b.c.jpeg`` -> ``a.b.c``."""
    last_dot = key.rfind(".")
    if last_dot == -1:
        return key
    return key[:last_dot]


def classify_key(key: str) -> KeyClassification:
    """Decide whether a decoded key names a source image to process."""
    extension = get_extension(key)
    if extension == VARIANT_EXTENSION:
        return KeyClassification.SKIP
    if extension in SOURCE_EXTENSIONS:
        return KeyClassification.PROCESS
    return KeyClassification.SKIP


def variant_key(source_key: str, width: int) -> str:
    """Derived key under which the ``width`` variant of ``source_key`` lives."""
    return f"{strip_extension(source_key)}/{width}w{VARIANT_EXTENSION}"
