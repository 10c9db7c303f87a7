from __future__ import annotations

from warnings import warn

from bsor_core.protocol import (
    CUT_EVENT_TYPES,
    MAGIC,
    SECTION_COUNT,
    SECTION_FRAMES,
    SECTION_HEIGHTS,
    SECTION_INFO,
    SECTION_NAMES,
    SECTION_NOTES,
    SECTION_PAUSES,
    SECTION_WALLS,
    VERSION,
)
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

from .const import ReplayDecodeError
from .primitives import Reader


class ReplayDecoder:
    """Decode one replay buffer into a ``Replay``.

    - Header is checked first; a bad magic or version fails before any
      section is read.
    - By default sections are read until six have been seen or the buffer
      ends cleanly on a section boundary. An unknown tag is fatal.
    - ``legacy_sections=True`` runs six iterations unconditionally and lets
      an unknown tag pass: its byte is consumed but no payload is read,
      as old readers did.
    """

    def __init__(self, data: bytes, legacy_sections: bool = False):
        self.r = Reader(data)
        self.legacy_sections = legacy_sections

    @property
    def scan_stats(self) -> dict:
        return dict(self.r.scan_stats)

    def decode(self) -> Replay:
        self._check_header()

        sections: dict = {}
        for _ in range(SECTION_COUNT):
            if not self.legacy_sections and self.r.remaining() == 0:
                break

            at = self.r.pos
            tag = self.r.read_uint8()
            name = SECTION_NAMES.get(tag)
            if name is None:
                if not self.legacy_sections:
                    raise ReplayDecodeError("E_SECTION_TAG", at, f"tag {tag}")
                warn(f"Unknown section tag {tag} at offset {at}. Tag skipped, no payload read.")
                continue
            sections[name] = self._read_section(tag)

        return Replay(**sections)

    def _check_header(self) -> None:
        magic = self.r.read_int32()
        if magic != MAGIC:
            raise ReplayDecodeError("E_MAGIC", 0, f"found {magic & 0xFFFFFFFF:#010x}")
        version = self.r.read_uint8()
        if version != VERSION:
            raise ReplayDecodeError("E_VERSION", 4, f"found {version}")

    def _read_section(self, tag: int):
        if tag == SECTION_INFO:
            return self._read_info()
        if tag == SECTION_FRAMES:
            return self._read_frames()
        if tag == SECTION_NOTES:
            return tuple(self._read_note() for _ in range(self.r.read_int32()))
        if tag == SECTION_WALLS:
            return tuple(self._read_wall() for _ in range(self.r.read_int32()))
        if tag == SECTION_HEIGHTS:
            return tuple(self._read_height() for _ in range(self.r.read_int32()))
        if tag == SECTION_PAUSES:
            return tuple(self._read_pause() for _ in range(self.r.read_int32()))
        raise AssertionError(tag)

    def _read_info(self) -> Info:
        r = self.r
        return Info(
            version=r.read_string(),
            game_version=r.read_string(),
            timestamp=r.read_string(),
            player_id=r.read_string(),
            player_name=r.read_name(),
            platform=r.read_string(),
            tracking_system=r.read_string(),
            hmd=r.read_string(),
            controller=r.read_string(),
            hash=r.read_string(),
            song_name=r.read_string(),
            mapper=r.read_string(),
            difficulty=r.read_string(),
            score=r.read_int32(),
            mode=r.read_string(),
            environment=r.read_string(),
            modifiers=r.read_string(),
            jump_distance=r.read_float32(),
            left_handed=r.read_bool(),
            height=r.read_float32(),
            start_time=r.read_float32(),
            fail_time=r.read_float32(),
            speed=r.read_float32(),
        )

    def _read_frames(self) -> tuple[Frame, ...]:
        # Zero-time frames and repeats of the last kept timestamp are dropped.
        kept: list[Frame] = []
        for _ in range(self.r.read_int32()):
            frame = self._read_frame()
            if frame.time == 0:
                continue
            if kept and frame.time == kept[-1].time:
                continue
            kept.append(frame)
        return tuple(kept)

    def _read_frame(self) -> Frame:
        return Frame(
            time=self.r.read_float32(),
            fps=self.r.read_int32(),
            head=self._read_euler(),
            left=self._read_euler(),
            right=self._read_euler(),
        )

    def _read_euler(self) -> Euler:
        return Euler(position=self._read_vector3(), rotation=self._read_quaternion())

    def _read_vector3(self) -> Vector3:
        r = self.r
        return Vector3(r.read_float32(), r.read_float32(), r.read_float32())

    def _read_quaternion(self) -> Quaternion:
        r = self.r
        return Quaternion(r.read_float32(), r.read_float32(), r.read_float32(), r.read_float32())

    def _read_note(self) -> Note:
        r = self.r
        note_id = r.read_int32()
        event_time = r.read_float32()
        spawn_time = r.read_float32()
        event_type = r.read_int32()
        cut_info = self._read_cut_info() if event_type in CUT_EVENT_TYPES else None
        return Note(note_id, event_time, spawn_time, event_type, cut_info)

    def _read_cut_info(self) -> CutInfo:
        r = self.r
        return CutInfo(
            speed_ok=r.read_bool(),
            direction_ok=r.read_bool(),
            saber_type_ok=r.read_bool(),
            was_cut_too_soon=r.read_bool(),
            saber_speed=r.read_float32(),
            saber_dir=self._read_vector3(),
            saber_type=r.read_int32(),
            time_deviation=r.read_float32(),
            cut_dir_deviation=r.read_float32(),
            cut_point=self._read_vector3(),
            cut_normal=self._read_vector3(),
            cut_distance_to_center=r.read_float32(),
            cut_angle=r.read_float32(),
            before_cut_rating=r.read_float32(),
            after_cut_rating=r.read_float32(),
        )

    def _read_wall(self) -> Wall:
        r = self.r
        return Wall(r.read_int32(), r.read_float32(), r.read_float32(), r.read_float32())

    def _read_height(self) -> Height:
        return Height(self.r.read_float32(), self.r.read_float32())

    def _read_pause(self) -> Pause:
        return Pause(self.r.read_int64(), self.r.read_float32())


def decode_with_stats(data: bytes, *, legacy_sections: bool = False) -> tuple[Replay, dict]:
    """Decode a replay and return it with the reader's scan statistics."""
    decoder = ReplayDecoder(data, legacy_sections=legacy_sections)
    replay = decoder.decode()
    return replay, decoder.scan_stats


def decode(data: bytes, *, legacy_sections: bool = False) -> Replay:
    """Decode a complete replay buffer. Raises ``ReplayDecodeError``."""
    return ReplayDecoder(data, legacy_sections=legacy_sections).decode()
