"""Handlers behind each script function.

A handler receives already-validated arguments and a call context, builds
its own client, performs exactly one API call and marshals the response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aws_script_bridge.config import Settings
from aws_script_bridge.errors import MarshalError
from aws_script_bridge.execution.aws_client import SessionFactory, call_api, open_client
from aws_script_bridge.execution.context import CallContext
from aws_script_bridge.execution.idempotency import generate_caller_reference
from aws_script_bridge.tools._marshal import (
    flatten_invalidation,
    flatten_object_keys,
    flatten_reservations,
    page_record,
)
from aws_script_bridge.tools._requests import (
    create_invalidation_request,
    describe_instances_request,
    get_object_request,
    list_objects_request,
    put_object_request,
)
from aws_script_bridge.tools._schemas import (
    CallArgs,
    DownloadArgs,
    InvalidateArgs,
    ListInstancesArgs,
    ListObjectsArgs,
    UploadArgs,
)
from aws_script_bridge.utils.local_file import copy_stream_to_file, open_for_upload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerDeps:
    settings: Settings
    session_factory: SessionFactory


def _client(service: str, args: CallArgs, context: CallContext, deps: HandlerDeps):
    return open_client(
        service,
        args.region,
        args.profile,
        context,
        deps.settings,
        deps.session_factory,
    )


def list_instances(
    args: ListInstancesArgs,
    context: CallContext,
    deps: HandlerDeps,
) -> list[dict[str, object]]:
    client = _client("ec2", args, context, deps)
    response = call_api(client, "describe_instances", context, **describe_instances_request(args))
    return flatten_reservations(response)


def list_instances_page(
    args: ListInstancesArgs,
    context: CallContext,
    deps: HandlerDeps,
) -> dict[str, object]:
    client = _client("ec2", args, context, deps)
    request = describe_instances_request(args, deps.settings.execution.max_page_size)
    response = call_api(client, "describe_instances", context, **request)
    return page_record(flatten_reservations(response), response.get("NextToken"))


def invalidate_cache_paths(
    args: InvalidateArgs,
    context: CallContext,
    deps: HandlerDeps,
) -> dict[str, object]:
    client = _client("cloudfront", args, context, deps)
    reference = generate_caller_reference(deps.settings)
    logger.debug(
        "Invalidating %d path(s) on %s with reference %s",
        len(args.paths),
        args.distribution_id,
        reference,
    )
    request = create_invalidation_request(args, reference)
    response = call_api(client, "create_invalidation", context, **request)
    return flatten_invalidation(response)


def upload_object(args: UploadArgs, context: CallContext, deps: HandlerDeps) -> bool:
    client = _client("s3", args, context, deps)
    with open_for_upload(args.local_path) as (handle, size):
        logger.debug(
            "Uploading %s (%d bytes) to s3://%s/%s", args.local_path, size, args.bucket, args.key
        )
        call_api(client, "put_object", context, **put_object_request(args, handle))
    return True


def list_objects(
    args: ListObjectsArgs,
    context: CallContext,
    deps: HandlerDeps,
) -> list[str]:
    client = _client("s3", args, context, deps)
    response = call_api(client, "list_objects_v2", context, **list_objects_request(args))
    return flatten_object_keys(response)


def list_objects_page(
    args: ListObjectsArgs,
    context: CallContext,
    deps: HandlerDeps,
) -> dict[str, object]:
    client = _client("s3", args, context, deps)
    request = list_objects_request(args, deps.settings.execution.max_page_size)
    response = call_api(client, "list_objects_v2", context, **request)
    next_token = response.get("NextContinuationToken") if response.get("IsTruncated") else None
    return page_record(flatten_object_keys(response), next_token)


def download_object(args: DownloadArgs, context: CallContext, deps: HandlerDeps) -> bool:
    client = _client("s3", args, context, deps)
    response = call_api(client, "get_object", context, **get_object_request(args))
    body = response.get("Body")
    if body is None:
        raise MarshalError("response is missing required field 'Body'")
    written = copy_stream_to_file(
        body,
        args.destination_path,
        context,
        deps.settings.execution.transfer_chunk_size,
    )
    logger.debug(
        "Downloaded s3://%s/%s to %s (%d bytes)",
        args.bucket,
        args.key,
        args.destination_path,
        written,
    )
    return True
