"""
ECDSA signature encodings and named-curve registry.

Converts ECDSA signatures between ASN.1 DER and raw r || s form, encodes
uncompressed EC points and maps curve domain parameters to and from their
OIDs.
"""

from .errors import (
    ECSigError,
    MalformedSignature,
    SignatureTooLarge,
    UnsupportedPointFormat,
    MalformedPoint,
    ConfigurationError
)

from .der import (
    decode_der,
    encode_der,
    decode_der_signature,
    encode_der_signature,
    raw_signature,
    pad_raw_signature
)

from .curves import (
    CurveDefinition,
    CurveRegistry,
    get_supported_curves,
    lookup,
    lookup_by_oid,
    lookup_by_name,
    lookup_by_length,
    identify,
    identify_ecpy_curve,
    oid_from_public_key
)

from .point import (
    encode_point,
    decode_point,
    public_key_to_point,
    point_to_public_key
)

from .oid import encode_oid, decode_oid

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ECSigError",
    "MalformedSignature",
    "SignatureTooLarge",
    "UnsupportedPointFormat",
    "MalformedPoint",
    "ConfigurationError",

    # Signature codec
    "decode_der",
    "encode_der",
    "decode_der_signature",
    "encode_der_signature",
    "raw_signature",
    "pad_raw_signature",

    # Curve registry
    "CurveDefinition",
    "CurveRegistry",
    "get_supported_curves",
    "lookup",
    "lookup_by_oid",
    "lookup_by_name",
    "lookup_by_length",
    "identify",
    "identify_ecpy_curve",
    "oid_from_public_key",

    # Point codec
    "encode_point",
    "decode_point",
    "public_key_to_point",
    "point_to_public_key",

    # OID codec
    "encode_oid",
    "decode_oid",
]
