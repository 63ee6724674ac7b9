from __future__ import annotations

from typing import IO

from gdriveapi.errors import InvalidArgumentError


def reset_if_seekable(stream: IO[bytes]) -> None:
    """Rewind the stream to position 0 when it supports seeking."""
    if stream is None:
        raise InvalidArgumentError("stream must not be None")
    if stream.seekable():
        stream.seek(0)
