import struct

import pytest

from bsor_codec.const import ReplayDecodeError
from bsor_codec.primitives import Reader, Writer


def i32(v: int) -> bytes:
    return struct.pack("<i", v)


def test_scalars_little_endian():
    w = Writer()
    w.write_int32(-2)
    w.write_uint8(200)
    w.write_float32(1.5)
    w.write_int64(-(2**40))
    w.write_bool(True)
    w.write_bool(False)
    data = w.getvalue()
    assert data == (
        struct.pack("<i", -2)
        + b"\xc8"
        + struct.pack("<f", 1.5)
        + struct.pack("<q", -(2**40))
        + b"\x01\x00"
    )

    r = Reader(data)
    assert r.read_int32() == -2
    assert r.read_uint8() == 200
    assert r.read_float32() == 1.5
    assert r.read_int64() == -(2**40)
    assert r.read_bool() is True
    assert r.read_bool() is False
    assert r.pos == len(data)


def test_bool_any_nonzero_is_true():
    r = Reader(b"\x07\x00\xff")
    assert [r.read_bool(), r.read_bool(), r.read_bool()] == [True, False, True]


def test_write_bool_writes_one_for_truthy():
    w = Writer()
    w.write_bool(5)
    assert w.getvalue() == b"\x01"


def test_write_string_prefixes_utf8_byte_length():
    w = Writer()
    w.write_string("né")
    assert w.getvalue() == i32(3) + "né".encode("utf-8")


def test_writer_grows_past_size_hint():
    w = Writer(2)
    w.write_string("longer than two bytes")
    assert len(w.getvalue()) == 4 + 21


def test_read_string_plain():
    r = Reader(i32(5) + b"steam" + b"tail")
    assert r.read_string() == "steam"
    assert r.pos == 9
    assert r.scan_stats["resyncs"] == 0


def test_read_string_resyncs_from_negative_prefix():
    data = i32(-1) + i32(3) + b"abc"
    r = Reader(data)
    assert r.read_string() == "abc"
    # Shifted one byte at a time over the four 0xff bytes.
    assert r.pos == len(data)
    assert r.scan_stats == {"resyncs": 1, "skipped_bytes": 4, "name_extra_bytes": 0}


def test_read_string_resyncs_from_oversized_prefix():
    # At offset 0 the prefix reads 0x3ff (1023); one byte later it reads 3.
    data = b"\xff" + i32(3) + b"abc"
    r = Reader(data)
    assert r.read_string() == "abc"
    assert r.pos == 8


def test_read_string_accepts_boundary_lengths():
    r = Reader(i32(0) + i32(300) + b"x" * 300)
    assert r.read_string() == ""
    assert r.read_string() == "x" * 300


def test_read_string_resync_runs_out_of_buffer():
    with pytest.raises(ReplayDecodeError) as exc:
        Reader(i32(-1) + b"\xff\xff").read_string()
    assert exc.value.code == "E_TRUNCATED"


def test_read_string_replaces_invalid_utf8():
    r = Reader(i32(2) + b"\xffA")
    assert r.read_string() == "\ufffdA"


def test_read_name_exact_length():
    data = i32(3) + b"bob" + i32(5) + b"steam"
    r = Reader(data)
    assert r.read_name() == "bob"
    assert r.pos == 7
    assert r.read_string() == "steam"


def test_read_name_folds_hidden_bytes_into_name():
    data = i32(3) + b"bob\x01\x02" + i32(6) + b"oculus"
    r = Reader(data)
    assert r.read_name() == "bob\x01\x02"
    # Cursor lands where the probe matched.
    assert r.pos == 9
    assert r.scan_stats["name_extra_bytes"] == 2
    assert r.read_string() == "oculus"


def test_read_name_probe_matches_eight():
    data = i32(2) + b"al" + b"\x00" + i32(8) + b"oculuspc"
    r = Reader(data)
    assert r.read_name() == "al\x00"
    assert r.read_string() == "oculuspc"


def test_read_name_empty_skips_probe():
    data = i32(0) + i32(4) + b"quux"
    r = Reader(data)
    assert r.read_name() == ""
    assert r.pos == 4


def test_read_name_probe_without_match_is_truncation():
    with pytest.raises(ReplayDecodeError) as exc:
        Reader(i32(3) + b"bob" + b"\x00\x00\x00\x00").read_name()
    assert exc.value.code == "E_TRUNCATED"


def test_read_past_end_is_truncation():
    r = Reader(b"\x01\x02")
    with pytest.raises(ReplayDecodeError) as exc:
        r.read_int32()
    assert exc.value.code == "E_TRUNCATED"
    assert exc.value.offset == 0


def test_integer_writes_wrap_to_width():
    w = Writer()
    w.write_int32(2**31)
    w.write_int32(-(2**31) - 1)
    w.write_uint8(257)
    w.write_int64(2**63)
    r = Reader(w.getvalue())
    assert r.read_int32() == -(2**31)
    assert r.read_int32() == 2**31 - 1
    assert r.read_uint8() == 1
    assert r.read_int64() == -(2**63)
