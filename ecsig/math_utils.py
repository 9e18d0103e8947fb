"""
Byte/Integer Utilities for Signature and Point Encodings

This module provides the big-endian magnitude helpers shared by the DER
signature codec and the point codec.

Functions:
    bytes_to_long(byte_array):
        Converts a byte string to an integer using big-endian byte order.

    long_to_bytes(n, blocksize=0):
        Converts an integer to a byte string using big-endian byte order.

    strip_leading_zeros(byte_array):
        Removes the zero bytes in front of a big-endian magnitude.

Note:
    All values handled here are non-negative magnitudes. Sign handling (the
    0x00 byte DER puts in front of integers with the top bit set) is the
    business of the DER codec, not of these helpers.
"""


def bytes_to_long(byte_array):
    """
    Convert a byte string to an integer.

    Args:
        byte_array (bytes): Bytes to convert

    Returns:
        int: Integer representation of the byte array (big-endian)
    """
    return int.from_bytes(byte_array, byteorder='big')


def long_to_bytes(n, blocksize=0):
    """
    Convert an integer to a byte string.

    Args:
        n (int): Non-negative integer to convert
        blocksize (int, optional): Minimum size of the resulting byte string

    Returns:
        bytes: Byte representation of the integer (big-endian)

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError("Cannot encode a negative magnitude")

    # Calculate minimum bytes needed to represent the number
    byte_length = (n.bit_length() + 7) // 8

    # Use blocksize if it's specified and larger than the calculated length
    if blocksize > 0 and byte_length < blocksize:
        byte_length = blocksize

    return n.to_bytes(byte_length, byteorder='big')


def strip_leading_zeros(byte_array):
    """
    Strip the leading zero bytes of a big-endian magnitude.

    The last byte is always kept, so an all-zero input comes back as a single
    zero byte and the result is only empty when the input is.

    Args:
        byte_array (bytes): Big-endian magnitude

    Returns:
        bytes: Shortest suffix of byte_array with the same numeric value
    """
    i = 0
    while i < len(byte_array) - 1 and byte_array[i] == 0:
        i += 1
    return bytes(byte_array[i:])


def significant_length(byte_array):
    """Number of bytes left once every leading zero is dropped (0 for zero)."""
    i = 0
    while i < len(byte_array) and byte_array[i] == 0:
        i += 1
    return len(byte_array) - i
