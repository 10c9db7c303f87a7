"""JSON rendering of replays, using the key names of the original tooling."""
from __future__ import annotations

import json
from dataclasses import fields

from bsor_core.records import (
    CutInfo,
    Euler,
    Frame,
    Height,
    Info,
    Note,
    Pause,
    Quaternion,
    Replay,
    Vector3,
    Wall,
)

# Record field name -> JSON key, where they differ
_KEYS = {
    Info: {
        "game_version": "gameVersion",
        "player_id": "playerID",
        "player_name": "playerName",
        "tracking_system": "trackingSystem",
        "song_name": "songName",
        "jump_distance": "jumpDistance",
        "left_handed": "leftHanded",
        "start_time": "startTime",
        "fail_time": "failTime",
    },
    Note: {
        "note_id": "noteID",
        "event_time": "eventTime",
        "spawn_time": "spawnTime",
        "event_type": "eventType",
        "cut_info": "noteCutInfo",
    },
    CutInfo: {
        "speed_ok": "speedOK",
        "direction_ok": "directionOK",
        "saber_type_ok": "saberTypeOK",
        "was_cut_too_soon": "wasCutTooSoon",
        "saber_speed": "saberSpeed",
        "saber_dir": "saberDir",
        "saber_type": "saberType",
        "time_deviation": "timeDeviation",
        "cut_dir_deviation": "cutDirDeviation",
        "cut_point": "cutPoint",
        "cut_normal": "cutNormal",
        "cut_distance_to_center": "cutDistanceToCenter",
        "cut_angle": "cutAngle",
        "before_cut_rating": "beforeCutRating",
        "after_cut_rating": "afterCutRating",
    },
    Wall: {"wall_id": "wallID", "spawn_time": "spawnTime"},
}

# Nested record types per field
_NESTED = {
    Euler: {"position": Vector3, "rotation": Quaternion},
    Frame: {"head": Euler, "left": Euler, "right": Euler},
    Note: {"cut_info": CutInfo},
    CutInfo: {"saber_dir": Vector3, "cut_point": Vector3, "cut_normal": Vector3},
}

_SECTIONS = {
    "info": Info,
    "frames": Frame,
    "notes": Note,
    "walls": Wall,
    "heights": Height,
    "pauses": Pause,
}


def _key(cls, name: str) -> str:
    return _KEYS.get(cls, {}).get(name, name)


def record_to_dict(rec) -> dict:
    out = {}
    for f in fields(rec):
        value = getattr(rec, f.name)
        if value is None:
            continue
        if f.name in _NESTED.get(type(rec), {}):
            value = record_to_dict(value)
        out[_key(type(rec), f.name)] = value
    return out


def record_from_dict(cls, obj: dict):
    if not isinstance(obj, dict):
        raise TypeError(f"{cls.__name__} must be an object, got {type(obj).__name__}")
    nested = _NESTED.get(cls, {})
    kwargs = {}
    for f in fields(cls):
        key = _key(cls, f.name)
        if key not in obj:
            # Only a note's cut info is optional.
            if cls is Note and f.name == "cut_info":
                continue
            raise KeyError(f"{cls.__name__} is missing '{key}'")
        value = obj[key]
        if f.name in nested:
            if value is None and not (cls is Note and f.name == "cut_info"):
                raise TypeError(f"{cls.__name__} '{key}' must not be null")
            if value is not None:
                value = record_from_dict(nested[f.name], value)
        kwargs[f.name] = value
    return cls(**kwargs)


def replay_to_dict(replay: Replay) -> dict:
    out = {}
    for name in replay.present_sections():
        value = getattr(replay, name)
        if name == "info":
            out[name] = record_to_dict(value)
        else:
            out[name] = [record_to_dict(item) for item in value]
    return out


def replay_from_dict(obj: dict) -> Replay:
    if not isinstance(obj, dict):
        raise TypeError(f"Replay must be an object, got {type(obj).__name__}")
    sections = {}
    for name, cls in _SECTIONS.items():
        if obj.get(name) is None:
            continue
        if name == "info":
            sections[name] = record_from_dict(cls, obj[name])
        elif isinstance(obj[name], list):
            sections[name] = tuple(record_from_dict(cls, item) for item in obj[name])
        else:
            raise TypeError(f"'{name}' must be a list, got {type(obj[name]).__name__}")
    return Replay(**sections)


def dumps(replay: Replay, indent: int | None = 2) -> str:
    return json.dumps(replay_to_dict(replay), indent=indent, ensure_ascii=False)


def loads(text: str) -> Replay:
    return replay_from_dict(json.loads(text))
