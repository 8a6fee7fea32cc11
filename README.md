# dsakit

Pure-Python building blocks for ML-DSA (FIPS 204) lattice signatures, and
deterministic nonce generation as described in RFC 6979.

The package has no runtime dependencies. It uses `hashlib` for SHAKE, `hmac` for
HMAC_DRBG, and plain Python integers for field arithmetic.

## Modules

- `dsakit.field`: a prime field (`Field`, with `small_reduce` and `barrett_reduce`)
  and immutable values built on it. These are `Elem`, `Polynomial`, `Vector`,
  `NttPolynomial`, `NttVector` and `NttMatrix`. Elements, polynomials and vectors
  support `+`, `-`, unary `-` and scaling by an `Elem` (`scalar * value`).
  `NttPolynomial * NttPolynomial` multiplies coefficient by coefficient.
  `NttVector @ NttVector` is a dot product and `NttMatrix @ NttVector` multiplies a
  matrix by a vector. Mixing values from different fields raises `ValueError`.
  Zero values come from `Polynomial.zero(field)`, `Vector.zero(field, k)` and the NTT
  counterparts.
- `dsakit.arrays`: `truncate(x, bits)`, `flatten(parts)` and `unflatten(seq, count)`.
- `dsakit.packing`: fixed-width little-endian packing of 256 coefficients. It provides
  `encoded_polynomial_size`, `byte_encode`, `byte_decode`, `encode`,
  `decode_polynomial` and `decode_vector`.
- `dsakit.algebra`: the ML-DSA base field (`BASE_FIELD`, q = 8380417) and the rounding
  helpers `barrett_reduce`, `decompose`, `mod_plus_minus`, `infinity_norm`,
  `power2round`, `high_bits` and `low_bits`. Most accept an element, a polynomial or a
  vector. `decompose` takes a single element.
- `dsakit.xof`: `ShakeState`, an absorb-then-squeeze sponge, created with
  `shake128_state()` or `shake256_state()`.
- `dsakit.bitpack`: packing of coefficients in a range `[-a, b]`. It provides
  `range_encoding_bits`, `bit_pack`, `bit_unpack`, `bit_pack_vector` and
  `bit_unpack_vector`.
- `dsakit.ntt`: `ntt`, `ntt_inverse` and `multiply_ntt` over the base field, for
  polynomials and vectors.
- `dsakit.params`: `Eta` and `ParameterSet`. A parameter set gives the sizes of every
  encoding. It can also encode and decode s1, s2, t0, t1, w1 and z, unpack mask
  samples, and join or split signing keys, verifying keys, signatures and hints.
- `dsakit.hint`: `make_hint`, `use_hint` and the `Hint` class. `Hint` provides
  `from_vectors`, `empty`, `hamming_weight`, `use_hint`, `bit_pack` and `bit_unpack`.
  `bit_unpack` returns `None` for a malformed encoding.
- `dsakit.sampling`: `coeff_from_three_bytes`, `coeff_from_half_byte`,
  `sample_in_ball`, `rej_ntt_poly`, `rej_bounded_poly`, `expand_a`, `expand_s` and
  `expand_mask`.
- `dsakit.constant_time`: byte-string helpers `leading_zeros`, `rshift`, `is_zero` and
  `lt`.
- `dsakit.rfc6979`: `HmacDrbg` (with `fill_bytes(n)`) and `generate_k`.

## Installing

```
pip install .
```

## Example: deterministic nonce per RFC 6979

```python
import hashlib
from dsakit.rfc6979 import generate_k

q = bytes.fromhex("04000000000000000000020108A2E0CC0D99F8A5EF")
x = bytes.fromhex("009A4D6792295A7F730FC3F2B49CBC0F62E862272F")
h = bytes.fromhex("01795EDF0D54DB760F156D0DAC04C0322B3A204224")

k = generate_k(x, q, h, b"", hashlib.sha256)
assert k.hex().upper() == "023AF4074C90A02B3FE61D286D5C87F425E6BDD81B"
```

`generate_k` raises `ValueError` if `x`, `q` and `h` differ in length, or if `h` is
not below `q`.

## Example: SHAKE sponge

```python
from dsakit.xof import shake128_state

state = shake128_state().absorb(b"hello world")
first = state.squeeze(32)
second = state.squeeze(32)
```

Further calls to `squeeze` continue the same output stream. Calling `absorb` after
squeezing has begun raises `RuntimeError`.

## Example: a parameter set

No parameter sets are predefined, so you build one from its values. The following
uses the ML-DSA-65 values:

```python
from dsakit.params import Eta, ParameterSet

gamma2 = (8_380_417 - 1) // 32
params = ParameterSet(
    k=6, l=5, eta=Eta.FOUR, gamma1=1 << 19, gamma2=gamma2,
    two_gamma2=2 * gamma2, w1_bits=4, lambda_size=48, omega=55, tau=49,
)
assert params.verifying_key_size == 1952
assert params.signing_key_size == 4032
assert params.signature_size == 3309
```

## What this package does not do

The package supplies the arithmetic, encodings, sampling and hint handling that
ML-DSA is built from. It does not generate key pairs, and it does not sign or verify
messages. It has no key or signature types, no PKCS#8 or PEM handling, and no
command-line tool.

## Running the tests

```
pip install .[test]
pytest
```