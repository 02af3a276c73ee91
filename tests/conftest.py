from __future__ import annotations

import io
from typing import Any

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody

from aws_script_bridge import config, logging_utils


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging() -> None:
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()
    logging_utils.reset_logging()


class FakeSession:
    def __init__(self, factory: "RecordingSessionFactory", profile_name: str | None,
                 region_name: str | None) -> None:
        self._factory = factory
        self.profile_name = profile_name
        self.region_name = region_name

    def client(self, service: str, config: Any = None) -> Any:
        self._factory.client_calls.append((service, config))
        return self._factory.clients[service]


class RecordingSessionFactory:
    """Stands in for boto3.Session and records every resolution."""

    def __init__(self, clients: dict[str, Any] | None = None,
                 error: Exception | None = None) -> None:
        self.clients = clients or {}
        self.error = error
        self.calls: list[dict[str, str | None]] = []
        self.client_calls: list[tuple[str, Any]] = []

    def __call__(self, profile_name: str | None = None,
                 region_name: str | None = None) -> FakeSession:
        self.calls.append({"profile_name": profile_name, "region_name": region_name})
        if self.error is not None:
            raise self.error
        return FakeSession(self, profile_name, region_name)

    @property
    def invoked(self) -> bool:
        return bool(self.calls) or bool(self.client_calls)


class InMemoryS3:
    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.list_calls: list[dict[str, object]] = []

    def put_object(self, Bucket: str, Key: str, Body: Any) -> dict[str, object]:
        self.objects[(Bucket, Key)] = Body.read()
        return {"ETag": '"etag"'}

    def get_object(self, Bucket: str, Key: str) -> dict[str, object]:
        if (Bucket, Key) not in self.objects:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "The specified key does not exist."}},
                "GetObject",
            )
        data = self.objects[(Bucket, Key)]
        return {"Body": StreamingBody(io.BytesIO(data), len(data)), "ContentLength": len(data)}

    def list_objects_v2(self, Bucket: str, Prefix: str = "", **kwargs: object) -> dict[str, object]:
        self.list_calls.append({"Bucket": Bucket, "Prefix": Prefix, **kwargs})
        keys = [key for (bucket, key) in self.objects if bucket == Bucket and key.startswith(Prefix)]
        response: dict[str, object] = {"KeyCount": len(keys), "IsTruncated": False}
        if keys:
            response["Contents"] = [{"Key": key, "Size": len(self.objects[(Bucket, key)])}
                                    for key in keys]
        return response


@pytest.fixture
def s3() -> InMemoryS3:
    return InMemoryS3()


@pytest.fixture
def session_factory(s3: InMemoryS3) -> RecordingSessionFactory:
    return RecordingSessionFactory(clients={"s3": s3})
