"""
Uncompressed EC point encoding (SEC 1, section 2.3.3).

A point (x, y) on a curve whose field is field_bits wide is written as
0x04 || X || Y, each coordinate big-endian on ceil(field_bits / 8) bytes.
Compressed (0x02/0x03) and hybrid (0x06/0x07) forms are not supported.
"""

import logging

from cryptography.hazmat.primitives.asymmetric import ec

from ecsig.curves import cryptography_curve
from ecsig.errors import MalformedPoint, UnsupportedPointFormat
from ecsig.math_utils import bytes_to_long, long_to_bytes, strip_leading_zeros

logger = logging.getLogger(__name__)

UNCOMPRESSED = 0x04


def coordinate_size(field_bits):
    return (field_bits + 7) // 8


def encode_point(x, y, field_bits):
    """
    Encode an affine point in uncompressed form.

    Args:
        x (int): Affine X coordinate
        y (int): Affine Y coordinate
        field_bits (int): Size of the curve field in bits

    Returns:
        bytes: 0x04 || X || Y, 2 * ceil(field_bits / 8) + 1 bytes long

    Raises:
        ValueError: If a coordinate is negative or too large for the field
    """
    size = coordinate_size(field_bits)
    encoded = bytearray(2 * size + 1)
    encoded[0] = UNCOMPRESSED

    for start, coordinate in ((1, x), (1 + size, y)):
        magnitude = strip_leading_zeros(long_to_bytes(coordinate))
        if len(magnitude) > size:
            raise ValueError(f"Coordinate does not fit a {field_bits}-bit field")
        encoded[start + size - len(magnitude):start + size] = magnitude

    return bytes(encoded)


def decode_point(data, field_bits):
    """
    Decode an uncompressed point.

    Args:
        data (bytes): 0x04 || X || Y
        field_bits (int): Size of the curve field in bits

    Returns:
        tuple: (x, y) affine coordinates

    Raises:
        UnsupportedPointFormat: If the first byte is not 0x04
        MalformedPoint: If the length does not match the field size
    """
    data = bytes(data)
    if not data:
        raise MalformedPoint("Empty point encoding")
    if data[0] != UNCOMPRESSED:
        logger.debug(f"Rejected point with format byte {data[0]:#04x}")
        raise UnsupportedPointFormat("Only uncompressed format is supported")

    size = coordinate_size(field_bits)
    if len(data) != 2 * size + 1:
        raise MalformedPoint(f"Expected {2 * size + 1} bytes for a {field_bits}-bit field, "
                             f"got {len(data)}")

    return bytes_to_long(data[1:size + 1]), bytes_to_long(data[size + 1:])


def public_key_to_point(public_key):
    """Uncompressed encoding of a cryptography EllipticCurvePublicKey."""
    numbers = public_key.public_numbers()
    return encode_point(numbers.x, numbers.y, public_key.curve.key_size)


def point_to_public_key(data, curve):
    """
    Build a cryptography public key from an uncompressed point.

    Args:
        data (bytes): 0x04 || X || Y
        curve (CurveDefinition): Curve the point lies on

    Returns:
        EllipticCurvePublicKey: The public key

    Raises:
        UnsupportedPointFormat, MalformedPoint: If data cannot be decoded
        ValueError: If the point is not on the curve
    """
    x, y = decode_point(data, curve.field_size)
    return ec.EllipticCurvePublicNumbers(x, y, cryptography_curve(curve)).public_key()
