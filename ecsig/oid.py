"""
DER OBJECT IDENTIFIER helpers.

Curve OIDs travel in DER form inside ECParameters and SubjectPublicKeyInfo
structures (e.g. 06 08 2a 86 48 ce 3d 03 01 07 for prime256v1). These two
functions convert between that form and the dotted-decimal strings the curve
registry is keyed by, using the DER primitives of python-ecdsa.
"""

from ecdsa import der

OID_TAG = 0x06


def parse_dotted(dotted):
    """
    Split a dotted-decimal OID into its arcs.

    Raises:
        ValueError: If the string is not a valid OID
    """
    try:
        arcs = tuple(int(arc) for arc in dotted.split("."))
    except ValueError:
        raise ValueError(f"Invalid OID: {dotted!r}")

    if len(arcs) < 2 or min(arcs) < 0 or arcs[0] > 2 or (arcs[0] < 2 and arcs[1] >= 40):
        raise ValueError(f"Invalid OID: {dotted!r}")
    return arcs


def encode_oid(dotted):
    """
    Encode a dotted-decimal OID as a DER OBJECT IDENTIFIER (tag, length, body).

    Raises:
        ValueError: If the string is not a valid OID
    """
    return der.encode_oid(*parse_dotted(dotted))


def decode_oid(data):
    """
    Decode a DER OBJECT IDENTIFIER into its dotted-decimal form.

    Raises:
        ValueError: If data is not a single, well-formed OBJECT IDENTIFIER
    """
    data = bytes(data)
    if len(data) < 3 or data[0] != OID_TAG or data[1] != len(data) - 2:
        raise ValueError("Invalid DER OBJECT IDENTIFIER")

    try:
        arcs, rest = der.remove_object(data)
    except der.UnexpectedDER as e:
        raise ValueError(f"Invalid DER OBJECT IDENTIFIER: {e}")
    if rest:
        raise ValueError("Trailing data after DER OBJECT IDENTIFIER")

    return ".".join(str(arc) for arc in arcs)
