"""Local file handling for object uploads and downloads.

Every handle opened here is scoped to one script call and released on
every exit path, including failures raised by the remote side.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import closing, contextmanager
from pathlib import Path
from typing import BinaryIO, Protocol

from botocore.exceptions import BotoCoreError

from aws_script_bridge.errors import LocalIOError, RemoteCallError, error_text
from aws_script_bridge.execution.context import CallContext


class ReadableStream(Protocol):
    def read(self, amt: int | None = None) -> bytes: ...

    def close(self) -> None: ...


def _local_path(path_str: str) -> Path:
    return Path(path_str).expanduser()


@contextmanager
def open_for_upload(path_str: str) -> Iterator[tuple[BinaryIO, int]]:
    """Open ``path_str`` for streaming read; yields ``(handle, size)``.

    Raises:
        LocalIOError: if the file cannot be opened.
    """
    try:
        handle = _local_path(path_str).open("rb")
    except OSError as exc:
        raise LocalIOError(error_text(exc)) from exc

    with handle:
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            raise LocalIOError(error_text(exc)) from exc
        yield handle, size


def copy_stream_to_file(
    body: ReadableStream,
    destination: str,
    context: CallContext,
    chunk_size: int,
) -> int:
    """Copy ``body`` into ``destination`` (created or truncated) chunk by chunk.

    Both the response stream and the local file are closed before returning.

    Returns:
        Number of bytes written.
    """
    with closing(body):
        try:
            handle = _local_path(destination).open("wb")
        except OSError as exc:
            raise LocalIOError(error_text(exc)) from exc

        written = 0
        with handle:
            while True:
                context.check()
                try:
                    chunk = body.read(chunk_size)
                except BotoCoreError as exc:
                    raise RemoteCallError(error_text(exc)) from exc
                if not chunk:
                    break
                try:
                    handle.write(chunk)
                except OSError as exc:
                    raise LocalIOError(error_text(exc)) from exc
                written += len(chunk)
        return written
