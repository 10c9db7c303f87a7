from __future__ import annotations

import json

from bsor_core.protocol import (
    ENCODE_BASE_SIZE,
    ENCODE_JSON_FACTOR,
    MAGIC,
    SECTION_TAGS,
    VERSION,
)
from bsor_core.records import (
    CutInfo,
    Euler,
    Frame,
    Info,
    Note,
    Quaternion,
    Replay,
    Vector3,
)

from .jsonio import replay_to_dict
from .primitives import Writer


def estimate_size(replay: Replay) -> int:
    """Initial output size: a fixed base plus twice the compact JSON length."""
    text = json.dumps(replay_to_dict(replay), separators=(",", ":"), ensure_ascii=False)
    return ENCODE_BASE_SIZE + ENCODE_JSON_FACTOR * len(text)


def _write_vector3(w: Writer, v: Vector3) -> None:
    w.write_float32(v.x)
    w.write_float32(v.y)
    w.write_float32(v.z)


def _write_quaternion(w: Writer, q: Quaternion) -> None:
    w.write_float32(q.x)
    w.write_float32(q.y)
    w.write_float32(q.z)
    w.write_float32(q.w)


def _write_euler(w: Writer, e: Euler) -> None:
    _write_vector3(w, e.position)
    _write_quaternion(w, e.rotation)


def _write_info(w: Writer, info: Info) -> None:
    # The name is written plainly; only readers carry the boundary probe.
    for text in (
        info.version,
        info.game_version,
        info.timestamp,
        info.player_id,
        info.player_name,
        info.platform,
        info.tracking_system,
        info.hmd,
        info.controller,
        info.hash,
        info.song_name,
        info.mapper,
        info.difficulty,
    ):
        w.write_string(text)
    w.write_int32(info.score)
    w.write_string(info.mode)
    w.write_string(info.environment)
    w.write_string(info.modifiers)
    w.write_float32(info.jump_distance)
    w.write_bool(info.left_handed)
    w.write_float32(info.height)
    w.write_float32(info.start_time)
    w.write_float32(info.fail_time)
    w.write_float32(info.speed)


def _write_frame(w: Writer, frame: Frame) -> None:
    w.write_float32(frame.time)
    w.write_int32(frame.fps)
    _write_euler(w, frame.head)
    _write_euler(w, frame.left)
    _write_euler(w, frame.right)


def _write_cut_info(w: Writer, c: CutInfo) -> None:
    w.write_bool(c.speed_ok)
    w.write_bool(c.direction_ok)
    w.write_bool(c.saber_type_ok)
    w.write_bool(c.was_cut_too_soon)
    w.write_float32(c.saber_speed)
    _write_vector3(w, c.saber_dir)
    w.write_int32(c.saber_type)
    w.write_float32(c.time_deviation)
    w.write_float32(c.cut_dir_deviation)
    _write_vector3(w, c.cut_point)
    _write_vector3(w, c.cut_normal)
    w.write_float32(c.cut_distance_to_center)
    w.write_float32(c.cut_angle)
    w.write_float32(c.before_cut_rating)
    w.write_float32(c.after_cut_rating)


def _write_note(w: Writer, note: Note) -> None:
    w.write_int32(note.note_id)
    w.write_float32(note.event_time)
    w.write_float32(note.spawn_time)
    w.write_int32(note.event_type)
    # Not cross-checked against event_type: a cut note without cut info
    # encodes short.
    if note.cut_info is not None:
        _write_cut_info(w, note.cut_info)


def _write_section(w: Writer, name: str, value) -> None:
    if name == "info":
        _write_info(w, value)
        return

    w.write_int32(len(value))
    for item in value:
        if name == "frames":
            _write_frame(w, item)
        elif name == "notes":
            _write_note(w, item)
        elif name == "walls":
            w.write_int32(item.wall_id)
            w.write_float32(item.energy)
            w.write_float32(item.time)
            w.write_float32(item.spawn_time)
        elif name == "heights":
            w.write_float32(item.height)
            w.write_float32(item.time)
        elif name == "pauses":
            w.write_int64(item.duration)
            w.write_float32(item.time)


def encode(replay: Replay) -> bytes:
    """Encode a replay. Only populated sections are written."""
    w = Writer(estimate_size(replay))
    w.write_int32(MAGIC)
    w.write_uint8(VERSION)

    for name in replay.present_sections():
        w.write_uint8(SECTION_TAGS[name])
        _write_section(w, name, getattr(replay, name))

    return w.getvalue()
