"""
Test cases for the DER <-> raw signature codec
"""

import random

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from ecsig.der import (
    decode_der,
    encode_der,
    decode_der_signature,
    encode_der_signature,
    raw_signature,
    pad_raw_signature
)
from ecsig.errors import MalformedSignature, SignatureTooLarge


def test_encode_small_values():
    """r = 1 and s = 2 padded to 32 bytes give the minimal DER encoding"""
    raw = (1).to_bytes(32, byteorder='big') + (2).to_bytes(32, byteorder='big')
    assert encode_der(raw) == bytes.fromhex("3006020101020102")


def test_decode_small_values():
    assert decode_der(bytes.fromhex("3006020101020102")) == b"\x01\x02"


def test_zero_values_encode_single_zero_byte():
    """An INTEGER content field is never empty, even for zero"""
    assert encode_der(bytes(64)) == bytes.fromhex("3006020100020100")

    raw = bytes(32) + (5).to_bytes(32, byteorder='big')
    assert encode_der(raw) == bytes.fromhex("3006020100020105")

    raw = (5).to_bytes(32, byteorder='big') + bytes(32)
    assert encode_der(raw) == bytes.fromhex("3006020105020100")


def test_zero_values_decode():
    """Both values zero: no significant bytes, so the raw form is empty"""
    assert decode_der(bytes.fromhex("3006020100020100")) == b""
    assert decode_der(bytes.fromhex("3006020100020105")) == b"\x00\x05"
    assert decode_der_signature(bytes.fromhex("3006020100020100")) == (0, 0)


def test_empty_raw_encodes_two_zero_integers():
    assert encode_der(b"") == bytes.fromhex("3006020100020100")
    assert encode_der(decode_der(bytes.fromhex("3006020100020100"))) == bytes.fromhex("3006020100020100")
    assert encode_der_signature(0, 0) == bytes.fromhex("3006020100020100")


def test_high_bit_gets_one_padding_byte():
    raw = (0x80).to_bytes(32, byteorder='big') + (1).to_bytes(32, byteorder='big')
    der = encode_der(raw)
    assert der == bytes.fromhex("300702020080020101")

    # Decoding strips the padding byte back off
    assert decode_der(der) == b"\x80\x01"


def test_full_width_high_bit_values():
    r = b"\xff" * 32
    s = b"\x80" + b"\x00" * 31
    der = encode_der(r + s)

    assert der[:2] == bytes([0x30, 2 + 33 + 2 + 33])
    assert der[2:5] == b"\x02\x21\x00"
    assert decode_der(der) == r + s


def test_decode_strips_redundant_leading_zeros():
    der = bytes.fromhex("30080203000001020102")
    assert decode_der(der) == b"\x01\x02"


def test_decode_pads_shorter_value():
    # r is three bytes, s is one
    der = bytes.fromhex("3008020301020302017f")
    assert decode_der(der) == bytes.fromhex("01020300007f")


def test_long_form_length():
    """P-521 sized values need the 0x81 long length form"""
    r = (1 << 520) + 12345
    s = (1 << 519) + 67890
    raw = raw_signature(r, s, 66)
    der = encode_der(raw)

    assert der[:3] == bytes([0x30, 0x81, 2 + 66 + 2 + 66])
    assert len(der) == 3 + 136
    assert decode_der(der) == raw


def test_largest_supported_content_length():
    raw = b"\x01" * 250
    der = encode_der(raw)

    assert der[:3] == bytes([0x30, 0x81, 254])
    assert decode_der(der) == raw


def test_signature_too_large():
    # Two 127 byte integers: 2 + 127 + 2 + 127 > 255
    with pytest.raises(SignatureTooLarge):
        encode_der(b"\x01" * 254)

    # Sign padding pushes 125 byte values over the limit
    with pytest.raises(SignatureTooLarge):
        encode_der(b"\xff" * 250)


@pytest.mark.parametrize("raw", [b"\x01", b"\x01\x02\x03"])
def test_encode_rejects_uneven_input(raw):
    with pytest.raises(MalformedSignature):
        encode_der(raw)


@pytest.mark.parametrize("der", [
    "30060201010201",           # too short
    "3106020101020102",         # not a SEQUENCE
    "3000020101020102",         # zero length byte
    "3082000602010102010200",   # two length bytes
    "3007020101020102",         # declared length too long
    "300502010102010200",       # declared length too short
    "3006030101020102",         # r is not an INTEGER
    "3006020101040102",         # s is not an INTEGER
    "3006020501020102",         # r runs past the end
    "3006020201020102",         # r and s lengths do not add up
    "3081060201010201020000",   # trailing bytes
])
def test_decode_rejects_malformed(der):
    with pytest.raises(MalformedSignature):
        decode_der(bytes.fromhex(der))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        decode_der(b"\x00" * 8)
    with pytest.raises(ValueError):
        encode_der(b"\xff" * 254)


def test_raw_round_trip():
    """decode_der(encode_der(raw)) gives raw back for minimal-width raw signatures"""
    rng = random.Random(4050)
    for _ in range(300):
        r = rng.getrandbits(rng.randint(0, 521))
        s = rng.getrandbits(rng.randint(0, 521))
        raw = raw_signature(r, s)
        assert decode_der(encode_der(raw)) == raw
        assert decode_der_signature(encode_der_signature(r, s)) == (r, s)


def test_der_round_trip():
    rng = random.Random(3279)
    for _ in range(100):
        der = encode_der_signature(rng.getrandbits(256), rng.getrandbits(256))
        assert encode_der(decode_der(der)) == der


def test_matches_cryptography_encoding():
    rng = random.Random(62)
    for _ in range(100):
        r = rng.getrandbits(rng.randint(1, 521))
        s = rng.getrandbits(rng.randint(1, 521))
        assert encode_der_signature(r, s) == encode_dss_signature(r, s)


@pytest.mark.parametrize("curve, size", [
    (ec.SECP256R1(), 32),
    (ec.SECP256K1(), 32),
    (ec.SECP384R1(), 48),
    (ec.SECP521R1(), 66),
])
def test_real_signatures(curve, size):
    private_key = ec.generate_private_key(curve)
    for i in range(10):
        signature = private_key.sign(b"message %d" % i, ec.ECDSA(hashes.SHA256()))

        assert decode_der_signature(signature) == decode_dss_signature(signature)

        raw = pad_raw_signature(decode_der(signature), size)
        assert len(raw) == 2 * size
        assert encode_der(raw) == signature


def test_raw_signature_width():
    assert raw_signature(1, 2) == b"\x01\x02"
    assert raw_signature(0, 0) == b""
    assert raw_signature(0x1234, 1) == bytes.fromhex("12340001")
    assert raw_signature(1, 2, 32) == (1).to_bytes(32, 'big') + (2).to_bytes(32, 'big')


def test_raw_signature_rejects_bad_values():
    with pytest.raises(ValueError):
        raw_signature(-1, 2)
    with pytest.raises(ValueError):
        raw_signature(1 << 256, 2, 32)


def test_pad_raw_signature():
    assert pad_raw_signature(b"\x01\x02", 4) == bytes.fromhex("0000000100000002")
    assert pad_raw_signature(b"\x01\x02", 1) == b"\x01\x02"

    with pytest.raises(MalformedSignature):
        pad_raw_signature(b"\x01\x02\x03\x04", 1)
    with pytest.raises(MalformedSignature):
        pad_raw_signature(b"\x01\x02\x03", 4)
