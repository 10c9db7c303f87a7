"""Flatten replay sections into tables and write them as Parquet."""
from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from bsor_core.records import Euler, Frame, Note, Replay

_POSE_COLUMNS = ["px", "py", "pz", "rx", "ry", "rz", "rw"]

_CUT_COLUMNS = [
    ("speed_ok", pa.bool_()),
    ("direction_ok", pa.bool_()),
    ("saber_type_ok", pa.bool_()),
    ("was_cut_too_soon", pa.bool_()),
    ("saber_speed", pa.float32()),
    ("saber_type", pa.int32()),
    ("time_deviation", pa.float32()),
    ("cut_dir_deviation", pa.float32()),
    ("cut_distance_to_center", pa.float32()),
    ("cut_angle", pa.float32()),
    ("before_cut_rating", pa.float32()),
    ("after_cut_rating", pa.float32()),
]

SCHEMAS = {
    "frames": pa.schema(
        [("time", pa.float32()), ("fps", pa.int32())]
        + [
            (f"{part}_{col}", pa.float32())
            for part in ("head", "left", "right")
            for col in _POSE_COLUMNS
        ]
    ),
    "notes": pa.schema(
        [
            ("note_id", pa.int32()),
            ("event_time", pa.float32()),
            ("spawn_time", pa.float32()),
            ("event_type", pa.int32()),
        ]
        + _CUT_COLUMNS
    ),
    "walls": pa.schema(
        [
            ("wall_id", pa.int32()),
            ("energy", pa.float32()),
            ("time", pa.float32()),
            ("spawn_time", pa.float32()),
        ]
    ),
    "heights": pa.schema([("height", pa.float32()), ("time", pa.float32())]),
    "pauses": pa.schema([("duration", pa.int64()), ("time", pa.float32())]),
}

# Table name -> sort key
SORT_KEYS = {
    "frames": "time",
    "notes": "event_time",
    "walls": "time",
    "heights": "time",
    "pauses": "time",
}


def _pose_row(prefix: str, e: Euler) -> dict:
    p, r = e.position, e.rotation
    values = [p.x, p.y, p.z, r.x, r.y, r.z, r.w]
    return {f"{prefix}_{col}": v for col, v in zip(_POSE_COLUMNS, values)}


def _frame_row(frame: Frame) -> dict:
    row = {"time": frame.time, "fps": frame.fps}
    row.update(_pose_row("head", frame.head))
    row.update(_pose_row("left", frame.left))
    row.update(_pose_row("right", frame.right))
    return row


def _note_row(note: Note) -> dict:
    row = {
        "note_id": note.note_id,
        "event_time": note.event_time,
        "spawn_time": note.spawn_time,
        "event_type": note.event_type,
    }
    cut = note.cut_info
    for col, _ in _CUT_COLUMNS:
        row[col] = getattr(cut, col) if cut is not None else None
    return row


def replay_tables(replay: Replay) -> dict[str, pd.DataFrame]:
    """One DataFrame per populated list section, with the Parquet column layout."""
    tables: dict[str, pd.DataFrame] = {}
    for name in replay.present_sections():
        if name == "info":
            continue
        items = getattr(replay, name)
        if name == "frames":
            rows = [_frame_row(f) for f in items]
        elif name == "notes":
            rows = [_note_row(n) for n in items]
        else:
            rows = [asdict(item) for item in items]
        columns = SCHEMAS[name].names
        tables[name] = pd.DataFrame(rows, columns=columns)
    return tables


def write_tables(replay: Replay, out_path: Path) -> list[Path]:
    """Write each populated list section to ``<out_path>/<section>.parquet``."""
    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, df in replay_tables(replay).items():
        df = df.sort_values(SORT_KEYS[name], kind="stable")
        table = pa.Table.from_pandas(df, schema=SCHEMAS[name], preserve_index=False)
        target = out_path / f"{name}.parquet"
        pq.write_table(table, target)
        written.append(target)
    return written
