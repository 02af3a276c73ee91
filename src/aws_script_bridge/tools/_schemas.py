"""Positional argument schemas and typed argument models for each script function."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from aws_script_bridge.domain.operations import ArgSpec


class CallArgs(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    region: str
    profile: str


class ListInstancesArgs(CallArgs):
    page_token: str | None = None


class InvalidateArgs(CallArgs):
    distribution_id: str
    paths: tuple[str, ...]


class ListObjectsArgs(CallArgs):
    bucket_path: str
    page_token: str | None = None


class UploadArgs(CallArgs):
    bucket: str
    key: str
    local_path: str


class DownloadArgs(CallArgs):
    bucket: str
    key: str
    destination_path: str


_REGION = ArgSpec("region")
_PROFILE = ArgSpec("profile")
_PAGE_TOKEN = ArgSpec("page_token", required=False)

LIST_INSTANCES_SCHEMA = (_REGION, _PROFILE)
LIST_INSTANCES_PAGE_SCHEMA = (_REGION, _PROFILE, _PAGE_TOKEN)
INVALIDATE_SCHEMA = (
    _REGION,
    _PROFILE,
    ArgSpec("distribution_id"),
    ArgSpec("paths", kind="list"),
)
UPLOAD_SCHEMA = (
    _REGION,
    _PROFILE,
    ArgSpec("bucket"),
    ArgSpec("key"),
    ArgSpec("local_path"),
)
LIST_OBJECTS_SCHEMA = (_REGION, _PROFILE, ArgSpec("bucket_path"))
LIST_OBJECTS_PAGE_SCHEMA = (_REGION, _PROFILE, ArgSpec("bucket_path"), _PAGE_TOKEN)
DOWNLOAD_SCHEMA = (
    _REGION,
    _PROFILE,
    ArgSpec("bucket"),
    ArgSpec("key"),
    ArgSpec("destination_path"),
)
