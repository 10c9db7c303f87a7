import pytest

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


def make_info(**overrides) -> Info:
    fields = dict(
        version="0.5.4",
        game_version="1.29.1",
        timestamp="1767225600",
        player_id="76561198000000000",
        player_name="Renée",
        platform="oculus",
        tracking_system="Oculus",
        hmd="Quest2",
        controller="Touch",
        hash="ABCDEF0123",
        song_name="Escape",
        mapper="Bob",
        difficulty="ExpertPlus",
        score=812345,
        mode="Standard",
        environment="DefaultEnvironment",
        modifiers="FS",
        jump_distance=18.5,
        left_handed=True,
        height=1.75,
        start_time=0.0,
        fail_time=0.0,
        speed=0.0,
    )
    fields.update(overrides)
    return Info(**fields)


def make_pose(k: float) -> Euler:
    return Euler(Vector3(k, k + 0.5, -k), Quaternion(0.0, 0.5, 0.25, 1.0))


def make_frame(t: float) -> Frame:
    return Frame(time=t, fps=90, head=make_pose(1.0), left=make_pose(2.0), right=make_pose(3.0))


def make_cut(saber_type: int = 1) -> CutInfo:
    return CutInfo(
        speed_ok=True,
        direction_ok=True,
        saber_type_ok=False,
        was_cut_too_soon=False,
        saber_speed=4.5,
        saber_dir=Vector3(0.0, -1.0, 0.0),
        saber_type=saber_type,
        time_deviation=-0.0625,
        cut_dir_deviation=12.25,
        cut_point=Vector3(0.5, 1.0, 1.5),
        cut_normal=Vector3(1.0, 0.0, 0.0),
        cut_distance_to_center=0.125,
        cut_angle=110.0,
        before_cut_rating=1.0,
        after_cut_rating=0.75,
    )


@pytest.fixture
def full_replay() -> Replay:
    return Replay(
        info=make_info(),
        frames=(make_frame(0.25), make_frame(0.5), make_frame(0.75)),
        notes=(
            Note(30100, 1.5, 0.5, 0, make_cut(0)),
            Note(30101, 2.0, 1.0, 1, make_cut(1)),
            Note(30102, 2.5, 1.5, 2),
            Note(30103, 3.0, 2.0, 3),
        ),
        walls=(Wall(7, 0.875, 4.0, 3.0),),
        heights=(Height(1.75, 0.5), Height(1.5, 6.0)),
        pauses=(Pause(-1, 7.5), Pause(2**40 + 3, 9.0)),
    )
