"""Caller reference generation for CloudFront invalidation batches."""

from __future__ import annotations

from uuid import uuid4

from aws_script_bridge.config import Settings
from aws_script_bridge.utils.time import unix_now


def timestamp_caller_reference(prefix: str, now: float) -> str:
    """Prefix plus whole Unix seconds.

    Two batches created within the same second get the same reference and
    CloudFront treats the second one as a replay of the first.
    """
    return f"{prefix}-{int(now)}"


def unique_caller_reference(prefix: str, now: float) -> str:
    return f"{prefix}-{int(now)}-{uuid4().hex}"


def generate_caller_reference(settings: Settings, now: float | None = None) -> str:
    if now is None:
        now = unix_now()
    prefix = settings.invalidation.caller_reference_prefix
    if settings.invalidation.caller_reference_mode == "timestamp":
        return timestamp_caller_reference(prefix, now)
    return unique_caller_reference(prefix, now)
