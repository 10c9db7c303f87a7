"""Little-endian scalar and string codecs over a byte cursor."""
from __future__ import annotations

import struct

from bsor_core.protocol import (
    FLOAT32_FMT,
    INT32_FMT,
    INT64_FMT,
    MAX_STRING_LEN,
    NAME_BOUNDARY_LENGTHS,
    UINT8_FMT,
)

from .const import ReplayDecodeError

_INT32 = struct.Struct(INT32_FMT)
_UINT8 = struct.Struct(UINT8_FMT)
_FLOAT32 = struct.Struct(FLOAT32_FMT)
_INT64 = struct.Struct(INT64_FMT)


def _wrap_signed(value: int, bits: int) -> int:
    """Reduce an integer modulo 2**bits into the signed range, as DataView setters do."""
    value = int(value) & ((1 << bits) - 1)
    return value - (1 << bits) if value >> (bits - 1) else value


class Reader:
    """Cursor over an immutable replay buffer.

    Every read advances ``pos`` by the width it consumed. A read that would
    run past the end raises ``ReplayDecodeError("E_TRUNCATED")``.
    """

    def __init__(self, data: bytes, pos: int = 0):
        self.data = memoryview(bytes(data))
        self.pos = pos
        self.scan_stats = {
            "resyncs": 0,
            "skipped_bytes": 0,
            "name_extra_bytes": 0,
        }

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def _need(self, n: int, at: int | None = None) -> int:
        at = self.pos if at is None else at
        if at < 0 or at + n > len(self.data):
            raise ReplayDecodeError(
                "E_TRUNCATED", at, f"need {n} bytes, buffer is {len(self.data)}"
            )
        return at

    def _unpack(self, codec: struct.Struct):
        at = self._need(codec.size)
        (value,) = codec.unpack_from(self.data, at)
        self.pos = at + codec.size
        return value

    def _peek_int32(self, at: int) -> int:
        self._need(_INT32.size, at)
        return _INT32.unpack_from(self.data, at)[0]

    def read_int32(self) -> int:
        return self._unpack(_INT32)

    def read_uint8(self) -> int:
        return self._unpack(_UINT8)

    def read_float32(self) -> float:
        return self._unpack(_FLOAT32)

    def read_int64(self) -> int:
        return self._unpack(_INT64)

    def read_bool(self) -> bool:
        return self._unpack(_UINT8) != 0

    def _take_text(self, start: int, length: int) -> str:
        self._need(length, start)
        raw = bytes(self.data[start:start + length])
        self.pos = start + length
        return raw.decode("utf-8", errors="replace")

    def read_string(self) -> str:
        """Read an int32-prefixed UTF-8 string.

        A prefix outside [0, MAX_STRING_LEN] means the cursor is misaligned:
        shift one byte and try again until a plausible prefix turns up.
        """
        skipped = 0
        while True:
            length = self._peek_int32(self.pos)
            if 0 <= length <= MAX_STRING_LEN:
                break
            self.pos += 1
            skipped += 1
        if skipped:
            self.scan_stats["resyncs"] += 1
            self.scan_stats["skipped_bytes"] += skipped
        return self._take_text(self.pos + 4, length)

    def read_name(self) -> str:
        """Read the player name, whose prefix may undercount its bytes.

        For a positive prefix, probe int32 values one byte at a time from the
        end of the nominal string until one is a known length of the next
        field; the bytes in between belong to the name.
        """
        length = self._peek_int32(self.pos)
        start = self.pos + 4
        if length < 0:
            # Empty name, but the cursor still moves by the negative prefix.
            self.pos = start + length
            return ""
        extra = 0
        if length > 0:
            while self._peek_int32(start + length + extra) not in NAME_BOUNDARY_LENGTHS:
                extra += 1
            self.scan_stats["name_extra_bytes"] += extra
        return self._take_text(start, length + extra)


class Writer:
    """Growable little-endian output buffer with a write cursor."""

    def __init__(self, size_hint: int = 0):
        self.buf = bytearray(size_hint)
        self.pos = 0

    def _reserve(self, n: int) -> int:
        at = self.pos
        short = at + n - len(self.buf)
        if short > 0:
            self.buf.extend(bytes(max(short, len(self.buf))))
        self.pos = at + n
        return at

    def _pack(self, codec: struct.Struct, value) -> None:
        codec.pack_into(self.buf, self._reserve(codec.size), value)

    def write_int32(self, value: int) -> None:
        self._pack(_INT32, _wrap_signed(value, 32))

    def write_uint8(self, value: int) -> None:
        self._pack(_UINT8, int(value) & 0xFF)

    def write_float32(self, value: float) -> None:
        self._pack(_FLOAT32, value)

    def write_int64(self, value: int) -> None:
        self._pack(_INT64, _wrap_signed(value, 64))

    def write_bool(self, value: bool) -> None:
        self._pack(_UINT8, 1 if value else 0)

    def write_string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.write_int32(len(raw))
        at = self._reserve(len(raw))
        self.buf[at:at + len(raw)] = raw

    def getvalue(self) -> bytes:
        return bytes(self.buf[:self.pos])
