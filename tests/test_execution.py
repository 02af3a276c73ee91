from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)

from aws_script_bridge.config import ExecutionSettings, Settings
from aws_script_bridge.errors import (
    CallCancelledError,
    ConfigurationError,
    RemoteCallError,
)
from aws_script_bridge.execution import aws_client
from aws_script_bridge.execution.aws_client import (
    build_client,
    call_api,
    open_client,
    resolve_session,
)
from aws_script_bridge.execution.context import CallContext


def test_resolve_session_passes_region_and_profile() -> None:
    factory = MagicMock()

    session = resolve_session("eu-west-1", "dev", CallContext(30), factory)

    assert session is factory.return_value
    factory.assert_called_once_with(profile_name="dev", region_name="eu-west-1")


def test_resolve_session_empty_strings_defer_to_default_chain() -> None:
    factory = MagicMock()
    resolve_session("", "", CallContext(30), factory)
    factory.assert_called_once_with(profile_name=None, region_name=None)


def test_resolve_session_profile_not_found_is_configuration_error() -> None:
    factory = MagicMock(side_effect=ProfileNotFound(profile="ghost"))

    with pytest.raises(ConfigurationError) as excinfo:
        resolve_session("eu-west-1", "ghost", CallContext(30), factory)

    assert str(excinfo.value) == "The config profile (ghost) could not be found"


def test_resolve_session_checks_cancellation_first() -> None:
    factory = MagicMock()
    ctx = CallContext(30)
    ctx.cancel()

    with pytest.raises(CallCancelledError):
        resolve_session("eu-west-1", "dev", ctx, factory)
    factory.assert_not_called()


def test_build_client_derives_timeouts_from_deadline() -> None:
    session = MagicMock()
    settings = Settings()

    build_client(session, "ec2", CallContext(4), settings)

    service, = session.client.call_args.args
    config = session.client.call_args.kwargs["config"]
    assert service == "ec2"
    assert 0 < config.read_timeout <= 4
    assert 0 < config.connect_timeout <= 4


def test_build_client_splits_deadline_across_retry_attempts() -> None:
    session = MagicMock()
    settings = Settings(execution=ExecutionSettings(max_attempts=4))

    build_client(session, "ec2", CallContext(8), settings)

    config = session.client.call_args.kwargs["config"]
    assert config.retries == {"total_max_attempts": 4, "mode": "standard"}
    assert 0 < config.read_timeout <= 2
    assert config.read_timeout * 4 <= 8


def test_build_client_s3_uses_when_required_checksums() -> None:
    session = MagicMock()

    build_client(session, "s3", CallContext(60), Settings())

    config = session.client.call_args.kwargs["config"]
    assert config.connect_timeout == 10
    assert config.request_checksum_calculation == "when_required"


def test_build_client_no_region_is_configuration_error() -> None:
    session = MagicMock()
    session.client.side_effect = NoRegionError()

    with pytest.raises(ConfigurationError, match="You must specify a region"):
        build_client(session, "ec2", CallContext(30), Settings())


def test_call_api_returns_response() -> None:
    client = MagicMock()
    client.describe_instances.return_value = {"Reservations": []}

    assert call_api(client, "describe_instances", CallContext(30)) == {"Reservations": []}


def test_call_api_client_error_is_remote_error_with_verbatim_text() -> None:
    client = MagicMock()
    client.list_objects_v2.side_effect = ClientError(
        {"Error": {"Code": "NoSuchBucket", "Message": "The specified bucket does not exist"}},
        "ListObjectsV2",
    )

    with pytest.raises(RemoteCallError) as excinfo:
        call_api(client, "list_objects_v2", CallContext(30), Bucket="nope", Prefix="")

    assert str(excinfo.value) == (
        "An error occurred (NoSuchBucket) when calling the ListObjectsV2 operation: "
        "The specified bucket does not exist"
    )


def test_call_api_connection_error_is_remote_error() -> None:
    client = MagicMock()
    client.describe_instances.side_effect = EndpointConnectionError(endpoint_url="https://x")

    with pytest.raises(RemoteCallError, match="Could not connect"):
        call_api(client, "describe_instances", CallContext(30))


def test_call_api_missing_credentials_is_configuration_error() -> None:
    client = MagicMock()
    client.describe_instances.side_effect = NoCredentialsError()

    with pytest.raises(ConfigurationError, match="Unable to locate credentials"):
        call_api(client, "describe_instances", CallContext(30))


def test_call_api_cancelled_never_calls_client() -> None:
    client = MagicMock()
    ctx = CallContext(30)
    ctx.cancel()

    with pytest.raises(CallCancelledError):
        call_api(client, "describe_instances", ctx)
    client.describe_instances.assert_not_called()


@patch("aws_script_bridge.execution.aws_client.boto3.Session")
def test_open_client_builds_fresh_session_every_call(mock_session_cls: MagicMock) -> None:
    settings = Settings()

    open_client("s3", "eu-west-1", "dev", CallContext(30), settings, aws_client.boto3.Session)
    open_client("s3", "eu-west-1", "dev", CallContext(30), settings, aws_client.boto3.Session)

    assert mock_session_cls.call_count == 2
    assert mock_session_cls.return_value.client.call_count == 2
