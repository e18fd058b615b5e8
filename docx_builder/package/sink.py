"""Deliver a finished package to its destination."""
from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import BinaryIO, Union

from docx_builder.errors import SinkWriteFailure
from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

Sink = Union[str, "os.PathLike[str]", BinaryIO]


def write_package(data: bytes, destination: Sink) -> None:
    """Write ``data`` to a path or a binary stream.

    Paths are written through a sibling temporary file and renamed into place,
    so the destination only ever holds a complete package.
    """
    if hasattr(destination, "write"):
        _write_stream(data, destination)  # type: ignore[arg-type]
        return
    _write_path(data, Path(destination))


def _write_stream(data: bytes, stream: BinaryIO) -> None:
    name = str(getattr(stream, "name", "<stream>"))
    try:
        stream.write(data)
        stream.flush()
    except (OSError, ValueError) as exc:
        raise SinkWriteFailure(name, str(exc)) from exc


def _write_path(data: bytes, path: Path) -> None:
    partial = path.with_name(f".{path.name}.partial")
    try:
        partial.write_bytes(data)
        os.replace(partial, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            partial.unlink()
        raise SinkWriteFailure(str(path), str(exc)) from exc
    LOGGER.info("Wrote %d bytes to %s", len(data), path)
