import pytest

from dsakit.algebra import Q
from dsakit.params import Eta
from dsakit.sampling import (
    coeff_from_half_byte,
    coeff_from_three_bytes,
    expand_a,
    expand_mask,
    expand_s,
    rej_bounded_poly,
    rej_ntt_poly,
    sample_in_ball,
)


def _max_abs_1(poly):
    return all(c.value in (0, 1, Q - 1) for c in poly)


def _hamming_weight(poly):
    return sum(1 for c in poly if c.value != 0)


@pytest.mark.parametrize("tau", range(1, 65))
def test_sample_in_ball(tau):
    for seed in range(255):
        rho = ((tau << 8) + seed).to_bytes(2, "big")
        p = sample_in_ball(rho, tau)
        assert _hamming_weight(p) == tau
        assert _max_abs_1(p)


def test_sample_in_ball_is_deterministic():
    first = sample_in_ball(b"seed", 39)
    second = sample_in_ball(b"seed", 39)
    assert _hamming_weight(first) == 39
    assert _max_abs_1(first)
    assert [c.value for c in first] == [c.value for c in second]


def test_sample_in_ball_rejects_large_tau():
    with pytest.raises(ValueError):
        sample_in_ball(b"seed", 65)


def test_rej_ntt_poly_in_range():
    for i in range(16):
        poly = rej_ntt_poly(bytes([i]) * 32, i, i + 1)
        assert len(poly) == 256
        assert all(c.value < Q for c in poly)


def test_rej_ntt_poly_rejects_large_index():
    with pytest.raises(ValueError):
        rej_ntt_poly(bytes(32), 256, 0)


def test_sample_cbd_eta_two():
    sample = rej_bounded_poly(bytes(32), Eta.TWO, 0)
    assert all((c.value + 2) % Q < 5 for c in sample)


def test_sample_cbd_eta_four():
    sample = rej_bounded_poly(bytes(32), Eta.FOUR, 0)
    assert all((c.value + 4) % Q < 9 for c in sample)


def test_coeff_from_three_bytes_values():
    assert coeff_from_three_bytes(bytes([0, 0, 0])).value == 0
    assert coeff_from_three_bytes(bytes([1, 0, 0x80])).value == 1
    assert coeff_from_three_bytes(bytes([0x00, 0xE0, 0x7F])).value == Q - 1
    assert coeff_from_three_bytes(bytes([0x01, 0xE0, 0x7F])) is None
    assert coeff_from_three_bytes(bytes([0xFF, 0xFF, 0x7F])) is None


def test_coeff_from_three_bytes_wrong_length():
    with pytest.raises(ValueError):
        coeff_from_three_bytes(b"\x00\x00")


@pytest.mark.parametrize(
    "b, eta, expected",
    [
        (0, Eta.TWO, 2),
        (2, Eta.TWO, 0),
        (4, Eta.TWO, Q - 2),
        (5, Eta.TWO, 2),
        (14, Eta.TWO, Q - 2),
        (15, Eta.TWO, None),
        (0, Eta.FOUR, 4),
        (4, Eta.FOUR, 0),
        (8, Eta.FOUR, Q - 4),
        (9, Eta.FOUR, None),
    ],
)
def test_coeff_from_half_byte(b, eta, expected):
    result = coeff_from_half_byte(b, eta)
    if expected is None:
        assert result is None
    else:
        assert result.value == expected


def test_coeff_from_half_byte_bad_eta():
    with pytest.raises(ValueError):
        coeff_from_half_byte(0, 3)


def test_expand_a_shape_and_entries():
    rho = bytes(range(32))
    a = expand_a(rho, 2, 3)
    assert len(a) == 2
    assert all(len(row) == 3 for row in a)
    assert a[1][2] == rej_ntt_poly(rho, 1, 2)
    assert a[0][1] == rej_ntt_poly(rho, 0, 1)


def test_expand_s_uses_base():
    rho = bytes(64)
    s = expand_s(rho, Eta.TWO, 4, 2)
    assert len(s) == 2
    assert s[0] == rej_bounded_poly(rho, Eta.TWO, 4)
    assert s[1] == rej_bounded_poly(rho, Eta.TWO, 5)


@pytest.mark.parametrize("gamma1", [1 << 17, 1 << 19])
def test_expand_mask_range(gamma1):
    mask = expand_mask(bytes(64), 0, gamma1, 2)
    assert len(mask) == 2
    for poly in mask:
        assert all(c.value <= gamma1 or c.value >= Q - (gamma1 - 1) for c in poly)


def test_expand_mask_offsets_nonce():
    rho = bytes(range(64))
    first = expand_mask(rho, 7, 1 << 17, 2)
    second = expand_mask(rho, 8, 1 << 17, 1)
    assert first[1] == second[0]


def test_expand_mask_nonce_overflow():
    with pytest.raises(ValueError):
        expand_mask(bytes(64), 0xFFFF, 1 << 17, 2)