"""Script module registration.

``load_module`` builds the namespace a script sees when it requires the
AWS module:

- listInstances / listInstancesPage: EC2 instances
- invalidateCachePaths: CloudFront invalidation
- uploadObject / downloadObject / listObjects / listObjectsPage: S3 objects
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import boto3
from pydantic import BaseModel

from aws_script_bridge.config import Settings, load_settings
from aws_script_bridge.domain.operations import ArgSpec
from aws_script_bridge.execution.aws_client import SessionFactory
from aws_script_bridge.execution.context import CallContext
from aws_script_bridge.script_runtime import Outcome, ScriptFunction, ScriptModule
from aws_script_bridge.tools import _handlers, _schemas
from aws_script_bridge.tools._arguments import extract_arguments
from aws_script_bridge.tools.base import dispatch

__all__ = ["MODULE_NAME", "FunctionSpec", "get_function_specs", "load_module"]

MODULE_NAME = "aws"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionSpec:
    name: str
    description: str
    schema: Sequence[ArgSpec]
    model: type[BaseModel]
    handler: Callable[[BaseModel, CallContext, _handlers.HandlerDeps], object]


def get_function_specs() -> list[FunctionSpec]:
    return [
        FunctionSpec(
            "listInstances",
            "List EC2 instances across all reservations (first page only).",
            _schemas.LIST_INSTANCES_SCHEMA,
            _schemas.ListInstancesArgs,
            _handlers.list_instances,
        ),
        FunctionSpec(
            "listInstancesPage",
            "List one page of EC2 instances; returns items, hasMore and nextToken.",
            _schemas.LIST_INSTANCES_PAGE_SCHEMA,
            _schemas.ListInstancesArgs,
            _handlers.list_instances_page,
        ),
        FunctionSpec(
            "invalidateCachePaths",
            "Create a CloudFront invalidation for a list of path patterns.",
            _schemas.INVALIDATE_SCHEMA,
            _schemas.InvalidateArgs,
            _handlers.invalidate_cache_paths,
        ),
        FunctionSpec(
            "uploadObject",
            "Upload a local file to an S3 bucket/key.",
            _schemas.UPLOAD_SCHEMA,
            _schemas.UploadArgs,
            _handlers.upload_object,
        ),
        FunctionSpec(
            "listObjects",
            "List object keys for '<bucket>:/<prefix>' (first page only).",
            _schemas.LIST_OBJECTS_SCHEMA,
            _schemas.ListObjectsArgs,
            _handlers.list_objects,
        ),
        FunctionSpec(
            "listObjectsPage",
            "List one page of object keys; returns items, hasMore and nextToken.",
            _schemas.LIST_OBJECTS_PAGE_SCHEMA,
            _schemas.ListObjectsArgs,
            _handlers.list_objects_page,
        ),
        FunctionSpec(
            "downloadObject",
            "Download an S3 object to a local path, truncating any existing file.",
            _schemas.DOWNLOAD_SCHEMA,
            _schemas.DownloadArgs,
            _handlers.download_object,
        ),
    ]


def _bind(spec: FunctionSpec, deps: _handlers.HandlerDeps) -> ScriptFunction:
    def call(*args: object, context: CallContext | None = None) -> Outcome:
        def run() -> object:
            parsed = extract_arguments(spec.name, spec.schema, args, spec.model)
            call_context = context or CallContext.from_settings(deps.settings)
            return spec.handler(parsed, call_context, deps)

        return dispatch(spec.name, run)

    call.__name__ = spec.name
    call.__doc__ = spec.description
    return ScriptFunction(name=spec.name, description=spec.description, handler=call)


def load_module(
    session_factory: SessionFactory = boto3.Session,
    settings: Settings | None = None,
) -> ScriptModule:
    """Build the script-facing AWS module.

    ``session_factory`` is the config resolver: it is called with
    ``profile_name`` and ``region_name`` once per script call.
    """
    deps = _handlers.HandlerDeps(
        settings=settings or load_settings(),
        session_factory=session_factory,
    )
    functions = [_bind(spec, deps) for spec in get_function_specs()]
    logger.info("Loaded script module '%s' with %d functions", MODULE_NAME, len(functions))
    return ScriptModule(MODULE_NAME, functions)
