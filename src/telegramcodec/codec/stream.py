"""Byte-level reading and writing utilities.

This module provides the forward-only cursor the decoder consumes and the
buffer the encoder fills. A reader over a peekable or seekable stream never
moves the stream past the bytes it has returned.
"""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Union

from ..exceptions import DecodeError, EncodeError, ErrorKind

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]


class ByteReader:
    """Reads bytes sequentially from an in-memory buffer or binary stream.

    Short reads are not errors: once the source is exhausted, reads return
    whatever was left (possibly nothing).

    Example:
        >>> reader = ByteReader(b"0042HELLO")
        >>> reader.read(4)
        b'0042'
        >>> reader.read_all()
        b'HELLO'
        >>> reader.exhausted()
        True
    """

    def __init__(self, source: ByteSource) -> None:
        """Initialize a reader.

        Args:
            source: Bytes-like object or binary file-like object with read()

        Raises:
            TypeError: If source is neither bytes-like nor readable
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._stream: BinaryIO = io.BytesIO(bytes(source))
        elif hasattr(source, "read"):
            self._stream = source
        else:
            raise TypeError(f"Expected bytes or a binary stream, got {type(source).__name__}")
        self._peekable = callable(getattr(self._stream, "peek", None))
        self._seekable = _is_seekable(self._stream)
        # Lookahead for streams that can neither peek nor seek back
        self._pending = b""
        self._position = 0

    def exhausted(self) -> bool:
        """Return True if no more bytes can be read.

        Peekable and seekable streams are left where they were, so a caller
        sharing the stream sees no byte consumed. Other streams keep one
        byte of lookahead inside the reader.
        """
        if self._pending:
            return False
        try:
            if self._peekable:
                return not self._stream.peek(1)  # type: ignore[attr-defined]
            if self._seekable:
                byte = self._stream.read(1)
                if byte:
                    self._stream.seek(-len(byte), io.SEEK_CUR)
                return not byte
        except OSError as err:
            raise DecodeError(f"read failed: {err}", kind=ErrorKind.IO_FAILED, cause=err) from err
        self._pending = self._fill(1)
        return not self._pending

    def read(self, num_bytes: int) -> bytes:
        """Read up to ``num_bytes`` bytes.

        Args:
            num_bytes: Number of bytes requested

        Returns:
            Bytes read, shorter than requested if the source ran out

        Raises:
            ValueError: If num_bytes is negative
            DecodeError: If the underlying stream fails
        """
        if num_bytes < 0:
            raise ValueError(f"length must not be negative, got {num_bytes}")

        data = self._pending[:num_bytes]
        self._pending = self._pending[num_bytes:]
        if len(data) < num_bytes:
            data += self._fill(num_bytes - len(data))

        self._position += len(data)
        return data

    def read_all(self) -> bytes:
        """Read everything left in the source."""
        data = self._pending + self._fill(None)
        self._pending = b""
        self._position += len(data)
        return data

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position

    def _fill(self, num_bytes: int | None) -> bytes:
        chunks = bytearray()
        try:
            if num_bytes is None:
                chunk = self._stream.read()
                if chunk:
                    chunks += chunk
            else:
                # Raw streams may return fewer bytes than asked before EOF
                while len(chunks) < num_bytes:
                    chunk = self._stream.read(num_bytes - len(chunks))
                    if not chunk:
                        break
                    chunks += chunk
        except OSError as err:
            raise DecodeError(f"read failed: {err}", kind=ErrorKind.IO_FAILED, cause=err) from err
        return bytes(chunks)


def _is_seekable(stream: Any) -> bool:
    try:
        return bool(stream.seekable())
    except (AttributeError, OSError, ValueError):
        return False


class ByteWriter:
    """Accumulates encoded field segments in order.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write(b"AB   ")
        >>> writer.write(b"   42")
        >>> writer.to_bytes()
        b'AB      42'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write(self, data: bytes) -> None:
        """Append a segment.

        Raises:
            EncodeError: If data is not bytes-like
        """
        try:
            self._buffer += data
        except TypeError as err:
            raise EncodeError(
                f"cannot write {type(data).__name__}", kind=ErrorKind.IO_FAILED, cause=err
            ) from err

    def to_bytes(self) -> bytes:
        """Return the accumulated bytes."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
