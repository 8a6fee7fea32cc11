import pytest

from dsakit.arrays import flatten, truncate, unflatten

FLAT = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
UNFLAT2 = [[1, 2], [3, 4], [5, 6], [7, 8], [9, 10]]
UNFLAT5 = [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]]


def test_flatten():
    assert flatten(UNFLAT2) == FLAT
    assert flatten(UNFLAT5) == FLAT


def test_unflatten():
    assert unflatten(FLAT, 5) == UNFLAT2
    assert unflatten(FLAT, 2) == UNFLAT5


def test_unflatten_tuple_keeps_part_type():
    parts = unflatten(tuple(FLAT), 5)
    assert parts == [tuple(p) for p in UNFLAT2]


def test_bytes_round_trip():
    data = bytes(FLAT)
    parts = unflatten(data, 2)
    assert parts == [bytes(UNFLAT5[0]), bytes(UNFLAT5[1])]
    assert flatten(parts) == data


def test_flatten_rejects_uneven_parts():
    with pytest.raises(ValueError):
        flatten([[1, 2], [3]])


def test_unflatten_rejects_uneven_split():
    with pytest.raises(ValueError):
        unflatten(FLAT, 3)


def test_unflatten_rejects_non_positive_count():
    with pytest.raises(ValueError):
        unflatten(FLAT, 0)


def test_flatten_empty():
    assert flatten([]) == []


def test_truncate():
    assert truncate(2**32 + 7, 32) == 7
    assert truncate(0xFFFF_FFFF, 32) == 0xFFFF_FFFF
    assert truncate(0x1234, 8) == 0x34
    assert truncate(0xABCD, 16) == 0xABCD


def test_truncate_rejects_negative_width():
    with pytest.raises(ValueError):
        truncate(5, -1)