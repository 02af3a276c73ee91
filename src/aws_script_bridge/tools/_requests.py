"""Request shaping: typed arguments to boto3 keyword arguments."""

from __future__ import annotations

from aws_script_bridge.tools._schemas import (
    DownloadArgs,
    InvalidateArgs,
    ListInstancesArgs,
    ListObjectsArgs,
    UploadArgs,
)

BUCKET_PATH_DELIMITER = ":/"


def parse_bucket_path(bucket_path: str) -> tuple[str, str]:
    """Split ``"<bucket>:/<prefix>"`` on the first delimiter.

    Without a delimiter, or with nothing before it, the whole string is the
    bucket and the prefix is empty.
    """
    index = bucket_path.find(BUCKET_PATH_DELIMITER)
    if index <= 0:
        return bucket_path, ""
    return bucket_path[:index], bucket_path[index + len(BUCKET_PATH_DELIMITER):]


def describe_instances_request(
    args: ListInstancesArgs,
    max_results: int | None = None,
) -> dict[str, object]:
    request: dict[str, object] = {}
    if args.page_token:
        request["NextToken"] = args.page_token
    if max_results is not None:
        # DescribeInstances accepts 5..1000.
        request["MaxResults"] = max(5, min(max_results, 1000))
    return request


def create_invalidation_request(args: InvalidateArgs, caller_reference: str) -> dict[str, object]:
    items = list(args.paths)
    return {
        "DistributionId": args.distribution_id,
        "InvalidationBatch": {
            "CallerReference": caller_reference,
            "Paths": {
                "Quantity": len(items),
                "Items": items,
            },
        },
    }


def list_objects_request(
    args: ListObjectsArgs,
    max_keys: int | None = None,
) -> dict[str, object]:
    bucket, prefix = parse_bucket_path(args.bucket_path)
    request: dict[str, object] = {"Bucket": bucket, "Prefix": prefix}
    if args.page_token:
        request["ContinuationToken"] = args.page_token
    if max_keys is not None:
        request["MaxKeys"] = max_keys
    return request


def put_object_request(args: UploadArgs, body: object) -> dict[str, object]:
    return {"Bucket": args.bucket, "Key": args.key, "Body": body}


def get_object_request(args: DownloadArgs) -> dict[str, object]:
    return {"Bucket": args.bucket, "Key": args.key}
