import pytest

from robotprefs.backends import get_backend_for_path, load_snapshot
from robotprefs.errors import BackendLoadError
from robotprefs.values import PreferenceType


def test_yaml_seed(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(
        "enabled: true\n"
        "gain: 3\n"
        "name: robot\n"
        "drive:\n"
        "  kP: 0.5\n"
        "setpoints: [1, 2, 3]\n"
    )
    snap = load_snapshot(path)
    assert snap["enabled"].type is PreferenceType.BOOLEAN
    assert snap["gain"].payload == 3.0
    assert snap["drive/kP"].payload == 0.5
    assert snap["setpoints"].type is PreferenceType.NUMBER_ARRAY


def test_json_seed(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text('{"a": 1, "b": ["x", "y"]}')
    snap = load_snapshot(path)
    assert snap["b"].payload == ("x", "y")


def test_empty_file_is_empty_snapshot(tmp_path):
    path = tmp_path / "seed.yml"
    path.write_text("")
    assert len(load_snapshot(path)) == 0


@pytest.mark.parametrize(
    "name,text",
    [
        ("list.yaml", "- 1\n- 2\n"),
        ("null.json", '{"a": null}'),
        ("broken.json", "{"),
        ("broken.yaml", "a: [1, 2\n"),
    ],
)
def test_bad_seed_files(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    with pytest.raises(BackendLoadError):
        load_snapshot(path)


def test_missing_file(tmp_path):
    with pytest.raises(BackendLoadError):
        load_snapshot(tmp_path / "nope.yaml")


def test_unknown_suffix(tmp_path):
    with pytest.raises(ValueError):
        get_backend_for_path(tmp_path / "seed.toml")


def test_number_too_large_for_float(tmp_path):
    path = tmp_path / "huge.json"
    path.write_text('{"a": ' + "9" * 400 + "}")
    with pytest.raises(BackendLoadError):
        load_snapshot(path)
