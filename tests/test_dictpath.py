import pytest

from cmdbkit.dictpath import delete_path, get_path, set_path, shift


def _sample():
    return {"a": {"b": {"c": 123}}}


def test_shift():
    assert shift("a.b.c") == ("a", "b.c")


def test_shift_single_segment():
    assert shift("a") == ("a", "")


def test_delete():
    data = _sample()
    delete_path(data, "a.b.c")
    assert data == {"a": {"b": {}}}


def test_set():
    data = _sample()
    set_path(data, "a.b.c", 456)
    assert data == {"a": {"b": {"c": 456}}}


def test_get():
    assert get_path(_sample(), "a.b.c") == 123


def test_set_creates_intermediate_dicts():
    data = {}
    set_path(data, "x.y", 1)
    assert data == {"x": {"y": 1}}


def test_get_missing_and_through_scalar():
    data = _sample()
    assert get_path(data, "a.z") is None
    assert get_path(data, "a.b.c.d") is None


def test_delete_missing_is_noop():
    data = _sample()
    delete_path(data, "a.x.c")
    delete_path(data, "a.b.c.d")
    assert data == _sample()


def test_set_through_scalar_raises():
    data = _sample()
    with pytest.raises(TypeError):
        set_path(data, "a.b.c.d", 1)