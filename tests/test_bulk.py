import pytest

from map2d import ABSENT, HashMap2D, InvalidKeyError


def test_put_all_to_row():
    map2d: HashMap2D[str, int, float] = HashMap2D()
    assert map2d.put_all_to_row({1: 1.0, 2: 2.0}, 'A') is map2d
    assert dict(map2d.row_view('A')) == {1: 1.0, 2: 2.0}


def test_put_all_to_column(map_2x2: HashMap2D[str, int, float]):
    map_2x2.put_all_to_column({'A': 0.1, 'C': 0.3}, 1)
    assert dict(map_2x2.column_view(1)) == {'A': 0.1, 'B': 2.5, 'C': 0.3}
    assert map_2x2.size() == 5


def test_put_all_from_map(map_2x2: HashMap2D[str, int, float]):
    target: HashMap2D[str, int, float] = HashMap2D()
    target.put('A', 1, 0.0)
    target.put('Z', 9, 9.0)

    assert target.put_all(map_2x2) is target
    assert target.size() == 5
    assert target.get('A', 1) == 2.3
    assert target.get('Z', 9) == 9.0
    assert map_2x2.size() == 4
    assert not map_2x2.has_row('Z')


def test_put_all_from_nested_mapping():
    map2d: HashMap2D[str, int, float] = HashMap2D()
    map2d.put_all({'A': {1: 1.0}, 'B': {1: 2.0, 2: 3.0}})
    assert map2d.size() == 3
    assert dict(map2d.column_view(1)) == {'A': 1.0, 'B': 2.0}


def test_put_all_from_itself(map_2x2: HashMap2D[str, int, float]):
    map_2x2.put_all(map_2x2)
    assert map_2x2.size() == 4


def test_put_all_to_column_stops_at_invalid_key():
    map2d: HashMap2D[str | None, int, float] = HashMap2D()
    with pytest.raises(InvalidKeyError):
        map2d.put_all_to_column({'A': 1.0, None: 2.0, 'C': 3.0}, 1)

    assert map2d.get('A', 1) == 1.0
    assert map2d.get('C', 1) is ABSENT


def test_put_all_to_row_stops_at_invalid_key():
    map2d: HashMap2D[str, int | None, float] = HashMap2D()
    with pytest.raises(InvalidKeyError):
        map2d.put_all_to_row({1: 1.0, None: 2.0, 3: 3.0}, 'A')

    assert dict(map2d.row_view('A')) == {1: 1.0}
    assert map2d.size() == 1


def test_put_all_stops_at_invalid_key():
    map2d: HashMap2D[str | None, int, float] = HashMap2D()
    with pytest.raises(InvalidKeyError):
        map2d.put_all({'A': {1: 1.0, 2: 2.0}, None: {1: 3.0}, 'C': {1: 4.0}})

    assert dict(map2d.row_view('A')) == {1: 1.0, 2: 2.0}
    assert not map2d.has_row('C')
    assert map2d.size() == 2


def test_copy_with_identity_conversion(map_2x2: HashMap2D[str, int, float]):
    copy = map_2x2.copy_with_conversion(lambda r: r, lambda c: c, lambda v: v)

    assert copy is not map_2x2
    assert copy.size() == map_2x2.size()
    assert sorted(copy.triples()) == sorted(map_2x2.triples())

    copy.put('A', 1, 0.0)
    assert map_2x2.get('A', 1) == 2.3


def test_copy_with_conversion_changes_types(map_2x2: HashMap2D[str, int, float]):
    copy = map_2x2.copy_with_conversion(str.lower, str, lambda v: round(v * 10))

    assert dict(copy.row_view('a')) == {'1': 23, '2': 24}
    assert copy.get('b', '2') == 26


def test_copy_with_conversion_keeps_settings():
    map2d: HashMap2D[str, int, int] = HashMap2D(prune_empty_rows=False)
    map2d.put('A', 1, 1)

    copy = map2d.copy_with_conversion(str.lower, str, str)
    assert isinstance(copy, HashMap2D)
    assert copy.prune_empty_rows is False


def test_copy_with_colliding_rows_keeps_one_value():
    map2d: HashMap2D[str, int, int] = HashMap2D()
    map2d.put('A', 1, 10)
    map2d.put('A', 2, 20)
    map2d.put('B', 1, 30)
    map2d.put('CC', 3, 40)

    copy = map2d.copy_with_conversion(len, lambda c: c, lambda v: v)

    assert copy.size() <= map2d.size()
    assert copy.size() == 3
    assert copy.get(1, 1) in (10, 30)
    assert copy.get(1, 2) == 20
    assert copy.get(2, 3) == 40


def test_copy_with_conversion_logs_collisions(caplog: pytest.LogCaptureFixture):
    map2d: HashMap2D[str, int, int] = HashMap2D()
    map2d.put('A', 1, 1)
    map2d.put('B', 1, 2)

    with caplog.at_level('DEBUG', logger='map2d.hash_map'):
        copy = map2d.copy_with_conversion(len, lambda c: c, lambda v: v)

    assert copy.size() == 1
    assert copy.get(1, 1) in (1, 2)
    assert 'collides' in caplog.text
