"""AWS session resolution and per-call client construction.

Nothing here is cached: every script call resolves its own session and
builds its own client, so no state is shared between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, NoRegionError

from aws_script_bridge.config import Settings
from aws_script_bridge.errors import ConfigurationError, RemoteCallError, error_text
from aws_script_bridge.execution.context import CallContext

SessionFactory = Callable[..., Any]

_logger = logging.getLogger(__name__)


def resolve_session(
    region: str,
    profile: str,
    context: CallContext,
    session_factory: SessionFactory = boto3.Session,
) -> Any:
    """Turn (region, profile) into a session via the default config chain.

    An empty profile or region defers to the chain's own defaults.
    """
    context.check()
    try:
        return session_factory(
            profile_name=profile or None,
            region_name=region or None,
        )
    except BotoCoreError as exc:
        raise ConfigurationError(error_text(exc)) from exc


def build_client(
    session: Any,
    service: str,
    context: CallContext,
    settings: Settings,
) -> Any:
    context.check()
    config = _get_service_config(service, context, settings)
    try:
        return session.client(service, config=config)
    except BotoCoreError as exc:
        raise ConfigurationError(error_text(exc)) from exc


def _get_service_config(service: str, context: CallContext, settings: Settings) -> Config:
    # Every attempt, retries included, gets an equal share of the remaining time.
    attempts = settings.execution.max_attempts
    per_attempt = context.remaining() / attempts
    base: dict[str, object] = {
        "read_timeout": per_attempt,
        "connect_timeout": min(settings.execution.connect_timeout_seconds, per_attempt),
        "retries": {"total_max_attempts": attempts, "mode": "standard"},
    }
    if service == "s3":
        base["request_checksum_calculation"] = "when_required"
        base["response_checksum_validation"] = "when_required"
    return Config(**base)


def call_api(
    client: Any,
    method_name: str,
    context: CallContext,
    **kwargs: object,
) -> dict[str, Any]:
    """Invoke one client method, mapping SDK failures onto bridge errors."""
    context.check()
    method = getattr(client, method_name)
    _logger.debug("Calling %s", method_name)
    try:
        return method(**kwargs)
    except (NoCredentialsError, NoRegionError) as exc:
        raise ConfigurationError(error_text(exc)) from exc
    except (ClientError, BotoCoreError) as exc:
        raise RemoteCallError(error_text(exc)) from exc


def open_client(
    service: str,
    region: str,
    profile: str,
    context: CallContext,
    settings: Settings,
    session_factory: SessionFactory = boto3.Session,
) -> Any:
    session = resolve_session(region, profile, context, session_factory)
    return build_client(session, service, context, settings)
