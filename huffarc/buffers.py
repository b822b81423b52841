"""Bit-level writer and reader that keep a count of set bits and of bytes."""

from __future__ import annotations

from typing import BinaryIO

from .types import BYTE_LENGTH

MAX_STRING_LENGTH = 4096


def _set_bits(data: bytes) -> int:
    return sum(byte.bit_count() for byte in data)


class BitWriter:
    """Packs bits, most significant first, into bytes written to a stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.length = 0
        self.byte = 0
        self.check_sum = 0
        self.bytes_count = 0

    def push(self, bit: int) -> None:
        """Append one bit; a full byte is written once the next bit arrives."""
        bit = 1 if bit else 0
        self.check_sum += bit
        if self.length == BYTE_LENGTH:
            self.flush()
        self.byte = ((self.byte << 1) | bit) & 0xFF
        self.length += 1

    def flush(self) -> None:
        """Write any pending bits, padded with zeros on the right."""
        if self.length == 0:
            return
        padded = (self.byte << (BYTE_LENGTH - self.length)) & 0xFF
        self.stream.write(bytes([padded]))
        self.bytes_count += 1
        self.length = 0
        self.byte = 0

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes straight to the stream, counting their set bits."""
        data = bytes(data)
        self.check_sum += _set_bits(data)
        self.bytes_count += len(data)
        self.stream.write(data)

    def write_string(self, text: str | bytes) -> None:
        """Write a NUL-terminated string."""
        raw = text.encode("utf-8", "surrogateescape") if isinstance(text, str) else bytes(text)
        self.write_bytes(raw + b"\0")


class BitReader:
    """Reads bits, most significant first, from a stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self.length = 0
        self.byte = 0
        self.check_sum = 0
        self.bytes_count = 0

    def pop_bit(self) -> int:
        """Return the next bit; raise EOFError when the stream is exhausted."""
        if self.length == 0:
            chunk = self.stream.read(1)
            if not chunk:
                raise EOFError("no more bits to read")
            self.byte = chunk[0]
            self.length = BYTE_LENGTH
            self.bytes_count += 1
        bit = (self.byte >> (self.length - 1)) & 1
        self.check_sum += bit
        self.length -= 1
        return bit

    def read_bytes(self, size: int) -> bytes:
        """Read raw bytes; they are counted but not added to the check sum."""
        self.bytes_count += size
        data = self.stream.read(size)
        if len(data) < size:
            raise EOFError(f"expected {size} bytes, got {len(data)}")
        return data

    def read_string(self) -> str:
        """Read a NUL-terminated string of at most MAX_STRING_LENGTH bytes."""
        raw = bytearray()
        while True:
            chunk = self.stream.read(1)
            if not chunk:
                raise EOFError("unterminated string")
            self.bytes_count += 1
            raw += chunk
            if len(raw) > MAX_STRING_LENGTH:
                raise ValueError("string is too long")
            self.check_sum += _set_bits(chunk)
            if chunk == b"\0":
                return bytes(raw[:-1]).decode("utf-8", "surrogateescape")

    def reset(self) -> None:
        """Drop the bits left in the current byte."""
        self.length = 0