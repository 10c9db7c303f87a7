"""BSOR replay value records.

Every record is frozen and composed by value. Field order matches the
wire order.
"""
from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Quaternion:
    x: float
    y: float
    z: float
    w: float


@dataclass(frozen=True)
class Euler:
    position: Vector3
    rotation: Quaternion


@dataclass(frozen=True)
class Info:
    version: str
    game_version: str
    timestamp: str
    player_id: str
    player_name: str
    platform: str
    tracking_system: str
    hmd: str
    controller: str
    hash: str
    song_name: str
    mapper: str
    difficulty: str
    score: int
    mode: str
    environment: str
    modifiers: str
    jump_distance: float
    left_handed: bool
    height: float
    start_time: float
    fail_time: float
    speed: float


@dataclass(frozen=True)
class Frame:
    time: float
    fps: int
    head: Euler
    left: Euler
    right: Euler


@dataclass(frozen=True)
class CutInfo:
    speed_ok: bool
    direction_ok: bool
    saber_type_ok: bool
    was_cut_too_soon: bool
    saber_speed: float
    saber_dir: Vector3
    saber_type: int
    time_deviation: float
    cut_dir_deviation: float
    cut_point: Vector3
    cut_normal: Vector3
    cut_distance_to_center: float
    cut_angle: float
    before_cut_rating: float
    after_cut_rating: float


@dataclass(frozen=True)
class Note:
    note_id: int
    event_time: float
    spawn_time: float
    event_type: int
    cut_info: CutInfo | None = None


@dataclass(frozen=True)
class Wall:
    wall_id: int
    energy: float
    time: float
    spawn_time: float


@dataclass(frozen=True)
class Height:
    height: float
    time: float


@dataclass(frozen=True)
class Pause:
    duration: int
    time: float


@dataclass(frozen=True)
class Replay:
    """A decoded session. A section is ``None`` when the file did not carry it."""

    info: Info | None = None
    frames: tuple[Frame, ...] | None = None
    notes: tuple[Note, ...] | None = None
    walls: tuple[Wall, ...] | None = None
    heights: tuple[Height, ...] | None = None
    pauses: tuple[Pause, ...] | None = None

    def present_sections(self) -> list[str]:
        """Names of populated sections, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]
