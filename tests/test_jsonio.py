import json

import pytest

from bsor_codec.jsonio import dumps, loads, replay_from_dict, replay_to_dict
from bsor_core.records import Note, Replay


def test_json_round_trip(full_replay):
    assert loads(dumps(full_replay)) == full_replay


def test_json_uses_original_key_names(full_replay):
    obj = replay_to_dict(full_replay)
    assert list(obj) == ["info", "frames", "notes", "walls", "heights", "pauses"]
    assert obj["info"]["playerID"] == "76561198000000000"
    assert obj["info"]["leftHanded"] is True
    assert obj["frames"][0]["head"]["rotation"]["w"] == 1.0
    assert obj["notes"][0]["noteCutInfo"]["saberDir"] == {"x": 0.0, "y": -1.0, "z": 0.0}
    assert obj["walls"][0]["wallID"] == 7


def test_uncut_note_has_no_cut_key(full_replay):
    obj = replay_to_dict(full_replay)
    assert "noteCutInfo" not in obj["notes"][2]


def test_absent_sections_are_omitted():
    obj = replay_to_dict(Replay(notes=(Note(1, 1.0, 0.5, 3),)))
    assert list(obj) == ["notes"]
    assert replay_from_dict(obj) == Replay(notes=(Note(1, 1.0, 0.5, 3),))


def test_null_cut_info_is_accepted():
    obj = {"notes": [{"noteID": 1, "eventTime": 1.0, "spawnTime": 0.5, "eventType": 2, "noteCutInfo": None}]}
    assert replay_from_dict(obj).notes[0].cut_info is None


def test_missing_field_names_the_key(full_replay):
    obj = replay_to_dict(full_replay)
    del obj["walls"][0]["spawnTime"]
    with pytest.raises(KeyError, match="spawnTime"):
        replay_from_dict(json.loads(json.dumps(obj)))


@pytest.mark.parametrize("obj", [[], "replay", 3])
def test_non_object_replay_rejected(obj):
    with pytest.raises(TypeError, match="Replay must be an object"):
        replay_from_dict(obj)


def test_null_nested_record_rejected(full_replay):
    obj = replay_to_dict(full_replay)
    obj["frames"][0]["head"] = None
    with pytest.raises(TypeError, match="'head' must not be null"):
        replay_from_dict(obj)


def test_section_must_be_a_list(full_replay):
    obj = replay_to_dict(full_replay)
    obj["walls"] = {"wallID": 1}
    with pytest.raises(TypeError, match="'walls' must be a list"):
        replay_from_dict(obj)
