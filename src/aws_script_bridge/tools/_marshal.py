"""Flatten boto3 response structures into script records and sequences.

Each response type is described by a table of ``FieldMapping`` entries. A
target key is emitted only when every step of its source path resolved to
a non-``None`` value; an absent key is how a script sees "not returned".
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from aws_script_bridge.errors import MarshalError
from aws_script_bridge.utils.serialization import enum_to_string

_MISSING = object()

Transform = Callable[[object], object]


@dataclass(frozen=True)
class FieldMapping:
    source: tuple[str, ...]
    target: str
    transform: Transform | None = None
    required: bool = False


def resolve_path(source: Mapping[str, object], path: Sequence[str]) -> object:
    """Walk ``path`` through nested mappings; ``_MISSING`` if any step is absent."""
    current: object = source
    for step in path:
        if not isinstance(current, Mapping):
            return _MISSING
        current = current.get(step)
        if current is None:
            return _MISSING
    return current


def flatten(
    source: Mapping[str, object],
    mappings: Iterable[FieldMapping],
) -> dict[str, object]:
    record: dict[str, object] = {}
    for mapping in mappings:
        value = resolve_path(source, mapping.source)
        if value is _MISSING:
            if mapping.required:
                raise MarshalError(
                    f"response is missing required field '{'.'.join(mapping.source)}'"
                )
            continue
        if mapping.transform is not None:
            value = mapping.transform(value)
        record[mapping.target] = value
    return record


def tag_map(tags: object) -> dict[str, str]:
    """``[{"Key": k, "Value": v}, ...]`` to ``{k: v}``, skipping incomplete pairs."""
    result: dict[str, str] = {}
    if not isinstance(tags, list):
        return result
    for tag in tags:
        if not isinstance(tag, Mapping):
            continue
        key = tag.get("Key")
        value = tag.get("Value")
        if key is not None and value is not None:
            result[str(key)] = str(value)
    return result


def string_list(items: object) -> list[str]:
    if not isinstance(items, list):
        return []
    return [str(item) for item in items if item is not None]


def paths_items(paths: object) -> list[str]:
    if not isinstance(paths, Mapping):
        return []
    return string_list(paths.get("Items"))


INSTANCE_FIELDS: tuple[FieldMapping, ...] = (
    FieldMapping(("InstanceId",), "instanceId", str, required=True),
    FieldMapping(("InstanceType",), "instanceType", enum_to_string),
    FieldMapping(("State", "Name"), "state", enum_to_string),
    FieldMapping(("PrivateIpAddress",), "privateIp", str),
    FieldMapping(("PublicIpAddress",), "publicIp", str),
)

INVALIDATION_FIELDS: tuple[FieldMapping, ...] = (
    FieldMapping(("Invalidation", "Id"), "id", str),
    FieldMapping(("Invalidation", "Status"), "status", enum_to_string),
    FieldMapping(("Invalidation", "InvalidationBatch", "Paths"), "paths", paths_items),
)


def flatten_instance(instance: Mapping[str, object]) -> dict[str, object]:
    record = flatten(instance, INSTANCE_FIELDS)
    if not record["instanceId"]:
        raise MarshalError("response is missing required field 'InstanceId'")
    record["tags"] = tag_map(instance.get("Tags"))
    return record


def flatten_reservations(response: Mapping[str, object]) -> list[dict[str, object]]:
    """All instances across all reservations, in response order."""
    instances: list[dict[str, object]] = []
    for reservation in response.get("Reservations") or []:
        for instance in reservation.get("Instances") or []:
            instances.append(flatten_instance(instance))
    return instances


def flatten_invalidation(response: Mapping[str, object]) -> dict[str, object]:
    return flatten(response, INVALIDATION_FIELDS)


def flatten_object_keys(response: Mapping[str, object]) -> list[str]:
    keys: list[str] = []
    for item in response.get("Contents") or []:
        key = item.get("Key")
        if key is not None:
            keys.append(str(key))
    return keys


def page_record(
    items: list[object],
    next_token: object,
) -> dict[str, object]:
    record: dict[str, object] = {"items": items, "hasMore": bool(next_token)}
    if next_token:
        record["nextToken"] = str(next_token)
    return record
