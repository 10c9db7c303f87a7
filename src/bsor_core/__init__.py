"""BSOR Core - Protocol constants and replay value records."""
from .records import (
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

__all__ = [
    "CutInfo",
    "Euler",
    "Frame",
    "Height",
    "Info",
    "Note",
    "Pause",
    "Quaternion",
    "Replay",
    "Vector3",
    "Wall",
]
