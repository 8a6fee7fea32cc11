import random

import pytest

from dsakit.algebra import BASE_FIELD, Q, infinity_norm
from dsakit.bitpack import bit_pack
from dsakit.field import Elem, Polynomial, Vector
from dsakit.params import T0_LOWER, T0_UPPER, Eta, ParameterSet


def _params() -> ParameterSet:
    return ParameterSet(
        k=6,
        l=5,
        eta=4,
        gamma1=1 << 19,
        gamma2=(Q - 1) // 32,
        two_gamma2=(Q - 1) // 16,
        w1_bits=4,
        lambda_size=48,
        omega=55,
        tau=49,
    )


def _poly(rng, lo, hi):
    return Polynomial(tuple(Elem(rng.randint(lo, hi) % Q, BASE_FIELD) for _ in range(256)))


def _vector(rng, n, lo, hi):
    return Vector(tuple(_poly(rng, lo, hi) for _ in range(n)))


def test_documented_sizes():
    p = _params()
    assert p.verifying_key_size == 1952
    assert p.signing_key_size == 4032
    assert p.signature_size == 3309


def test_derived_constants_are_consistent():
    p = _params()
    assert p.gamma1_minus_beta + p.beta == p.gamma1
    assert p.gamma2_minus_beta + p.beta == p.gamma2
    assert p.hint_size == p.omega + p.k
    assert p.z_size == p.mask_sample_size * p.l


def test_eta_is_coerced():
    assert _params().eta is Eta.FOUR
    assert Eta(2) is Eta.TWO


def test_invalid_parameters_rejected():
    base = dict(
        k=6, l=5, gamma1=1 << 19, gamma2=(Q - 1) // 32, two_gamma2=(Q - 1) // 16,
        w1_bits=4, lambda_size=48, omega=55, tau=49,
    )
    with pytest.raises(ValueError):
        ParameterSet(eta=3, **base)
    with pytest.raises(ValueError):
        ParameterSet(eta=4, **{**base, "two_gamma2": (Q - 1) // 32})


def test_s1_s2_round_trip():
    p = _params()
    rng = random.Random(1)
    s1 = _vector(rng, p.l, -4, 4)
    s2 = _vector(rng, p.k, -4, 4)
    enc1 = p.encode_s1(s1)
    enc2 = p.encode_s2(s2)
    assert len(enc1) == p.s1_size
    assert len(enc2) == p.s2_size
    assert p.decode_s1(enc1) == s1
    assert p.decode_s2(enc2) == s2


def test_t0_t1_round_trip():
    p = _params()
    rng = random.Random(2)
    t0 = _vector(rng, p.k, -T0_LOWER, T0_UPPER)
    t1 = _vector(rng, p.k, 0, 1023)
    enc0 = p.encode_t0(t0)
    enc1 = p.encode_t1(t1)
    assert len(enc0) == p.t0_size
    assert len(enc1) == p.t1_size
    assert p.decode_t0(enc0) == t0
    assert p.decode_t1(enc1) == t1


def test_w1_z_round_trip():
    p = _params()
    rng = random.Random(3)
    w1 = _vector(rng, p.k, 0, 15)
    z = _vector(rng, p.l, -(p.gamma1 - 1), p.gamma1)
    assert p.decode_w1(p.encode_w1(w1)) == w1
    enc = p.encode_z(z)
    assert len(enc) == p.z_size
    assert p.decode_z(enc) == z


def test_unpack_mask():
    p = _params()
    rng = random.Random(4)
    poly = _poly(rng, -(p.gamma1 - 1), p.gamma1)
    data = bit_pack(poly, p.gamma1 - 1, p.gamma1)
    assert p.unpack_mask(data) == poly
    arbitrary = bytes(rng.randrange(256) for _ in range(p.mask_sample_size))
    assert infinity_norm(p.unpack_mask(arbitrary)) <= p.gamma1


def test_signing_key_concat_split():
    p = _params()
    rng = random.Random(5)
    parts = tuple(
        bytes(rng.randrange(256) for _ in range(n))
        for n in (32, 32, 64, p.s1_size, p.s2_size, p.t0_size)
    )
    enc = p.concat_sk(*parts)
    assert len(enc) == p.signing_key_size
    assert p.split_sk(enc) == parts


def test_verifying_key_and_signature_split():
    p = _params()
    rho = bytes(range(32))
    t1 = bytes(p.t1_size)
    assert p.split_vk(p.concat_vk(rho, t1)) == (rho, t1)
    c_tilde = bytes([7]) * p.lambda_size
    z = bytes([1]) * p.z_size
    h = bytes(range(p.hint_size))
    sig = p.concat_sig(c_tilde, z, h)
    assert p.split_sig(sig) == (c_tilde, z, h)
    assert p.split_hint(h) == (h[: p.omega], h[p.omega :])


def test_wrong_lengths_rejected():
    p = _params()
    with pytest.raises(ValueError):
        p.decode_t1(bytes(p.t1_size - 1))
    with pytest.raises(ValueError):
        p.split_sig(bytes(p.signature_size + 1))
    with pytest.raises(ValueError):
        p.concat_vk(bytes(31), bytes(p.t1_size))
    with pytest.raises(ValueError):
        p.encode_s1(Vector.zero(BASE_FIELD, p.k))


def test_out_of_range_coefficient_rejected():
    p = _params()
    s1 = Vector((Polynomial.zero(BASE_FIELD),) * (p.l - 1) + (
        Polynomial((Elem(5, BASE_FIELD),) * 256),
    ))
    with pytest.raises(ValueError):
        p.encode_s1(s1)