"""
DER-Encoded ECDSA Signature Codec

This module converts ECDSA signatures between the ASN.1 DER form produced by
generic signing primitives and the raw r || s concatenation required by
XML Signature (RFC 4050) and similar formats.

Functions:
    decode_der(sequence):
        Converts a DER SEQUENCE { INTEGER r, INTEGER s } into raw r || s bytes.

    encode_der(raw):
        Converts raw r || s bytes into a DER SEQUENCE { INTEGER r, INTEGER s }.

    decode_der_signature(sequence):
        Decodes a DER-encoded ECDSA signature into its (r, s) integers.

    encode_der_signature(r, s):
        Encodes the (r, s) integers as a DER signature.

    raw_signature(r, s, size=0):
        Builds the raw form of (r, s), optionally at a fixed width.

    pad_raw_signature(raw, size):
        Widens a raw signature to the fixed width of a curve.

Only the short length form and the one-byte long form (0x81 nn) are
supported, which covers every curve up to and including P-521.
"""

import logging

from ecsig.errors import MalformedSignature, SignatureTooLarge
from ecsig.math_utils import bytes_to_long, long_to_bytes, strip_leading_zeros, significant_length

logger = logging.getLogger(__name__)

SEQUENCE_TAG = 0x30
INTEGER_TAG = 0x02
LONG_FORM_ONE_BYTE = 0x81

# Largest content length a single length byte can describe
MAX_CONTENT_LENGTH = 255


def decode_der(sequence):
    """
    Convert a DER-encoded ECDSA signature to its raw r || s form.

    The two halves of the result have the same width: the larger of the
    significant lengths of r and s. Callers that need the fixed width of a
    curve should pass the result through pad_raw_signature().

    Args:
        sequence (bytes): DER-encoded signature

    Returns:
        bytes: r || s, each right-justified in its half

    Raises:
        MalformedSignature: If the input is not a SEQUENCE of two INTEGERs
    """
    sequence = bytes(sequence)

    # Verify this is a sequence
    if len(sequence) < 8 or sequence[0] != SEQUENCE_TAG:
        logger.debug("Rejected signature: too short or not a SEQUENCE")
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")

    if 0 < sequence[1] < 0x80:
        offset = 2
    elif sequence[1] == LONG_FORM_ONE_BYTE:
        offset = 3
    else:
        logger.debug(f"Rejected signature: unsupported length byte {sequence[1]:#04x}")
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")

    sequence_length = sequence[offset - 1]
    if sequence_length != len(sequence) - offset:
        logger.debug(f"Rejected signature: declared length {sequence_length}, "
                     f"actual {len(sequence) - offset}")
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")

    # Parse the r component
    if sequence[offset] != INTEGER_TAG:
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")
    r_length = sequence[offset + 1]

    # Parse the s component
    s_offset = offset + 2 + r_length
    if s_offset + 1 >= len(sequence):
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")
    s_length = sequence[s_offset + 1]

    if sequence_length != 2 + r_length + 2 + s_length or sequence[s_offset] != INTEGER_TAG:
        logger.debug("Rejected signature: inner INTEGER fields do not add up")
        raise MalformedSignature("Invalid ASN.1 format of ECDSA signature")

    r_bytes = sequence[offset + 2:s_offset]
    s_bytes = sequence[s_offset + 2:]

    # Drops the 0x00 sign byte as well as genuine leading zeros
    i = significant_length(r_bytes)
    j = significant_length(s_bytes)
    raw_length = max(i, j)

    return (r_bytes[len(r_bytes) - i:].rjust(raw_length, b"\x00")
            + s_bytes[len(s_bytes) - j:].rjust(raw_length, b"\x00"))


def _integer_content(magnitude):
    """Content octets of a DER INTEGER holding the given non-negative magnitude."""
    content = strip_leading_zeros(magnitude)
    if not content:
        return b"\x00"
    if content[0] & 0x80:
        # Positive integers must not look negative
        return b"\x00" + content
    return content


def encode_der(raw):
    """
    Convert a raw r || s signature to its DER encoding.

    Args:
        raw (bytes): r || s, both halves of the same width

    Returns:
        bytes: DER SEQUENCE { INTEGER r, INTEGER s }

    Raises:
        MalformedSignature: If the input has odd length
        SignatureTooLarge: If the DER content would exceed 255 bytes
    """
    raw = bytes(raw)
    if len(raw) % 2:
        raise MalformedSignature("Invalid XMLDSIG format of ECDSA signature")

    raw_length = len(raw) // 2
    r = _integer_content(raw[:raw_length])
    s = _integer_content(raw[raw_length:])

    content_length = 2 + len(r) + 2 + len(s)
    if content_length > MAX_CONTENT_LENGTH:
        logger.debug(f"Refusing to encode signature with content length {content_length}")
        raise SignatureTooLarge("Invalid XMLDSIG format of ECDSA signature")

    if content_length < 0x80:
        header = bytes([SEQUENCE_TAG, content_length])
    else:
        header = bytes([SEQUENCE_TAG, LONG_FORM_ONE_BYTE, content_length])

    return (header
            + bytes([INTEGER_TAG, len(r)]) + r
            + bytes([INTEGER_TAG, len(s)]) + s)


def decode_der_signature(sequence):
    """
    Decode a DER-encoded ECDSA signature.

    Args:
        sequence (bytes): DER-encoded signature

    Returns:
        tuple: (r, s) components of the signature

    Raises:
        MalformedSignature: If the input is not a valid signature
    """
    raw = decode_der(sequence)
    half = len(raw) // 2
    return bytes_to_long(raw[:half]), bytes_to_long(raw[half:])


def encode_der_signature(r, s):
    """Encode the (r, s) components of a signature in DER."""
    return encode_der(raw_signature(r, s))


def raw_signature(r, s, size=0):
    """
    Build the raw r || s form of a signature.

    Args:
        r (int): First signature component
        s (int): Second signature component
        size (int, optional): Width of each half, usually the coordinate size
            of the curve. Defaults to the smallest width that fits both values.

    Returns:
        bytes: r || s

    Raises:
        ValueError: If a component is negative or does not fit in size bytes
    """
    if r < 0 or s < 0:
        raise ValueError("Signature components must be non-negative")

    width = max((r.bit_length() + 7) // 8, (s.bit_length() + 7) // 8)
    if size:
        if width > size:
            raise ValueError(f"Signature component does not fit in {size} bytes")
        width = size

    return long_to_bytes(r, width) + long_to_bytes(s, width)


def pad_raw_signature(raw, size):
    """
    Left-pad both halves of a raw signature to size bytes each.

    Raises:
        MalformedSignature: If raw has odd length or halves wider than size
    """
    raw = bytes(raw)
    half = len(raw) // 2
    if len(raw) % 2 or half > size:
        raise MalformedSignature(f"Raw signature does not fit in {2 * size} bytes")
    return raw[:half].rjust(size, b"\x00") + raw[half:].rjust(size, b"\x00")
