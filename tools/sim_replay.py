import json
import random
import struct
from datetime import datetime, timezone
from pathlib import Path

from bsor_codec.encode import encode
from bsor_codec.jsonio import dumps
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

FPS = 90
# Platform strings whose byte length the name probe recognises (5, 6, 8).
PLATFORMS = ["steam", "oculus", "oculuspc"]
SONGS = [("Believer", "Alice"), ("Escape", "Bob"), ("Ghost", "Carol")]


def f32(x: float) -> float:
    """Snap to the nearest float32 so JSON and binary agree exactly."""
    return struct.unpack("<f", struct.pack("<f", x))[0]


def rand_vec(rng: random.Random, scale: float = 1.0) -> Vector3:
    return Vector3(*(f32(rng.uniform(-scale, scale)) for _ in range(3)))


def rand_pose(rng: random.Random) -> Euler:
    return Euler(rand_vec(rng), Quaternion(*(f32(rng.uniform(-1, 1)) for _ in range(4))))


def generate_replay(seed: int = 0, frames: int = 200, notes: int = 40) -> Replay:
    rng = random.Random(seed)
    song, mapper = rng.choice(SONGS)

    info = Info(
        version="0.5.4",
        game_version="1.29.1",
        timestamp=str(int(datetime(2026, 1, 1, tzinfo=timezone.utc).timestamp())),
        player_id=str(rng.randint(10**15, 10**16 - 1)),
        player_name=f"player-{rng.randint(100, 999)}",
        platform=rng.choice(PLATFORMS),
        tracking_system="Oculus",
        hmd="Quest2",
        controller="Touch",
        hash="%040X" % rng.getrandbits(160),
        song_name=song,
        mapper=mapper,
        difficulty="ExpertPlus",
        score=rng.randint(100_000, 900_000),
        mode="Standard",
        environment="DefaultEnvironment",
        modifiers="FS,GN",
        jump_distance=f32(rng.uniform(16, 24)),
        left_handed=False,
        height=f32(rng.uniform(1.5, 1.9)),
        start_time=0.0,
        fail_time=0.0,
        speed=0.0,
    )

    # Strictly increasing, non-zero times so nothing is filtered on decode.
    frame_list = tuple(
        Frame(
            time=f32((i + 1) / FPS),
            fps=FPS,
            head=rand_pose(rng),
            left=rand_pose(rng),
            right=rand_pose(rng),
        )
        for i in range(frames)
    )

    note_list = []
    for i in range(notes):
        event_type = rng.choice([0, 0, 0, 1, 2, 3])
        cut = None
        if event_type in (0, 1):
            cut = CutInfo(
                speed_ok=True,
                direction_ok=event_type == 0,
                saber_type_ok=True,
                was_cut_too_soon=False,
                saber_speed=f32(rng.uniform(2, 10)),
                saber_dir=rand_vec(rng),
                saber_type=rng.choice([0, 1]),
                time_deviation=f32(rng.uniform(-0.1, 0.1)),
                cut_dir_deviation=f32(rng.uniform(-30, 30)),
                cut_point=rand_vec(rng),
                cut_normal=rand_vec(rng),
                cut_distance_to_center=f32(rng.uniform(0, 0.3)),
                cut_angle=f32(rng.uniform(60, 180)),
                before_cut_rating=f32(rng.uniform(0, 1)),
                after_cut_rating=f32(rng.uniform(0, 1)),
            )
        t = f32(0.5 + i * 0.5)
        note_list.append(Note(30000 + i, t, f32(t - 1.0), event_type, cut))

    return Replay(
        info=info,
        frames=frame_list,
        notes=tuple(note_list),
        walls=(Wall(100, f32(0.9), f32(3.0), f32(2.0)),),
        heights=(Height(info.height, f32(1.0)),),
        pauses=(Pause(rng.randint(10**6, 10**8), f32(5.0)),),
    )


def write_replay(out_dir: str, seed: int = 0, with_json: bool = False) -> Path:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    replay = generate_replay(seed)
    path = out / f"replay-{seed}.bsor"
    path.write_bytes(encode(replay))
    if with_json:
        path.with_suffix(".json").write_text(dumps(replay) + "\n", encoding="utf-8")

    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/sim_replay.py OUT_DIR [--seed N] [--runs N] [--json]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_int(arg_list: list[str], flag: str, default: int) -> tuple[int, list[str]]:
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    with_json, args = pop_flag(args, "--json")
    seed, args = pop_int(args, "--seed", 0)
    runs, args = pop_int(args, "--runs", 1)

    out = args[0] if len(args) > 0 else "simulated_replays"
    for n in range(runs):
        write_replay(out, seed=seed + n, with_json=with_json)
    print(json.dumps({"runs": runs, "out": out}))
