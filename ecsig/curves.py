"""
Registry of Well-Known Elliptic Curves

This module holds the domain parameters of the named curves the library knows
about and answers the questions callers have when moving between a key's
parameters and its curve identifier.

Functions:
    lookup_by_oid(oid), lookup_by_name(name), lookup(name_or_oid):
        Return the CurveDefinition for an OID and/or name, or None.

    lookup_by_length(bits):
        Return the recommended curve for a field size, or None.

    identify(field, a, b, x, y, n, h):
        Return the OID of the known curve with exactly these parameters.

    identify_ecpy_curve(curve), oid_from_public_key(public_key):
        Same as identify() for parameters coming from ecpy or cryptography.

The table is built once, the first time it is needed, and is read-only
afterwards.
"""

import logging
import re
import threading
from dataclasses import dataclass, field as dataclass_field

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import ObjectIdentifier
from ecpy.curves import Curve

from ecsig.errors import ConfigurationError
from ecsig.oid import encode_oid

logger = logging.getLogger(__name__)

PRIME = "prime"
BINARY = "binary"

NAME_SPLIT_PATTERN = re.compile(r",|\[|\]")


@dataclass(frozen=True)
class CurveDefinition:
    """
    Domain parameters of a named curve.

    All parameters except the cofactor are hex strings as published (no 0x
    prefix). For binary curves, field holds the reduction polynomial.
    """
    name: str
    oid: str
    field: str
    a: str
    b: str
    x: str
    y: str
    n: str
    h: int
    kind: str = PRIME
    is_default: bool = False
    values: tuple = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.kind not in (PRIME, BINARY):
            raise ConfigurationError(f"Invalid type: {self.kind}")
        # Integer views of (field, a, b, x, y, n), parsed once
        object.__setattr__(self, "values", tuple(
            int(value, 16) for value in (self.field, self.a, self.b, self.x, self.y, self.n)))

    @property
    def aliases(self):
        """Every name the curve is known by, e.g. secp256r1, NIST P-256, X9.62 prime256v1."""
        names = (name.strip() for name in NAME_SPLIT_PATTERN.split(self.name))
        return tuple(name for name in names if name)

    @property
    def field_size(self):
        """Size of the field in bits (degree of the polynomial for binary curves)."""
        bits = self.values[0].bit_length()
        return bits - 1 if self.kind == BINARY else bits

    @property
    def coordinate_size(self):
        return (self.field_size + 7) // 8

    @property
    def encoded_oid(self):
        return encode_oid(self.oid)

    def matches(self, field, a, b, x, y, n, h):
        """True if the given parameters are exactly those of this curve."""
        return self.values == (field, a, b, x, y, n) and self.h == h


class CurveRegistry:
    """
    Curve definitions indexed by OID, by name and by field size.

    Records are stored once; the three indexes map keys to positions in that
    tuple. For a field size, the first curve registered wins unless a later
    one is marked as default.
    """

    def __init__(self, definitions):
        curves = []
        self._by_oid = {}
        self._by_name = {}
        self._by_length = {}

        for curve in definitions:
            position = len(curves)

            if curve.oid in self._by_oid:
                raise ConfigurationError(f"Duplicate oid: {curve.oid}")

            aliases = curve.aliases
            for name in aliases:
                if name in self._by_name or aliases.count(name) > 1:
                    raise ConfigurationError(f"Duplicate name: {name}")

            curves.append(curve)
            self._by_oid[curve.oid] = position
            for name in aliases:
                self._by_name[name] = position

            length = curve.field_size
            if curve.is_default or length not in self._by_length:
                self._by_length[length] = position

        self._curves = tuple(curves)

    def __len__(self):
        return len(self._curves)

    def __iter__(self):
        return iter(self._curves)

    def _get(self, index, key):
        position = index.get(key)
        return None if position is None else self._curves[position]

    def lookup_by_oid(self, oid):
        return self._get(self._by_oid, oid)

    def lookup_by_name(self, name):
        return self._get(self._by_name, name)

    def lookup(self, name):
        """Look a curve up by OID, then by name."""
        curve = self.lookup_by_oid(name)
        if curve is not None:
            return curve
        return self.lookup_by_name(name)

    def lookup_by_length(self, bits):
        return self._get(self._by_length, bits)

    def identify(self, field, a, b, x, y, n, h):
        """
        Find the OID of the curve with the given domain parameters.

        Args:
            field (int): Prime modulus, or reduction polynomial for binary curves
            a (int), b (int): Curve coefficients
            x (int), y (int): Generator coordinates
            n (int): Order of the generator
            h (int): Cofactor

        Returns:
            str: OID of the matching curve, or None
        """
        bits = field.bit_length()
        for curve in self._curves:
            # Quick field size check first
            if curve.values[0].bit_length() != bits:
                continue
            if curve.matches(field, a, b, x, y, n, h):
                return curve.oid
        return None


_CURVES = (
    # SEC2 prime curves
    CurveDefinition(
        "secp256k1",
        "1.3.132.0.10",
        "fffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f",
        "0000000000000000000000000000000000000000000000000000000000000000",
        "0000000000000000000000000000000000000000000000000000000000000007",
        "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798",
        "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8",
        "fffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141",
        1),

    CurveDefinition(
        "secp256r1 [NIST P-256, X9.62 prime256v1]",
        "1.2.840.10045.3.1.7",
        "ffffffff00000001000000000000000000000000ffffffffffffffffffffffff",
        "ffffffff00000001000000000000000000000000fffffffffffffffffffffffc",
        "5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b",
        "6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296",
        "4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5",
        "ffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551",
        1, is_default=True),

    CurveDefinition(
        "secp384r1 [NIST P-384]",
        "1.3.132.0.34",
        "fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffeffffffff0000000000000000ffffffff",
        "fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffeffffffff0000000000000000fffffffc",
        "b3312fa7e23ee7e4988e056be3f82d19181d9c6efe8141120314088f5013875ac656398d8a2ed19d2a85c8edd3ec2aef",
        "aa87ca22be8b05378eb1c71ef320ad746e1d3b628ba79b9859f741e082542a385502f25dbf55296c3a545e3872760ab7",
        "3617de4a96262c6f5d9e98bf9292dc29f8f41dbd289a147ce9da3113b5f0b8c00a60b1ce1d7e819d7a431d7c90ea0e5f",
        "ffffffffffffffffffffffffffffffffffffffffffffffffc7634d81f4372ddf581a0db248b0a77aecec196accc52973",
        1, is_default=True),

    CurveDefinition(
        "secp521r1 [NIST P-521]",
        "1.3.132.0.35",
        "01ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff",
        "01fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffc",
        "0051953eb9618e1c9a1f929a21a0b68540eea2da725b99b315f3b8b489918ef109e156193951ec7e937b1652c0bd3bb1bf073573df883d2c34f1ef451fd46b503f00",
        "00c6858e06b70404e9cd9e3ecb662395b4429c648139053fb521f828af606b4d3dbaa14b5e77efe75928fe1dc127a2ffa8de3348b3c1856a429bf97e7e31c2e5bd66",
        "011839296a789a3bc0045c8a5fb42c7d1bd998f54449579b446817afbd17273e662c97ee72995ef42640c550b9013fad0761353c7086a272c24088be94769fd16650",
        "01fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffa51868783bf2f966b7fcc0148f709a5d03bb5c9b8899c47aebb6fb71e91386409",
        1, is_default=True),
)

_registry = None
_registry_lock = threading.Lock()


def get_registry():
    """Return the process-wide registry, building it on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = CurveRegistry(_CURVES)
                logger.debug(f"Curve registry built with {len(_registry)} curves")
    return _registry


def get_supported_curves():
    return tuple(get_registry())


def lookup_by_oid(oid):
    """
    Look up a curve by its dotted-decimal OID.

    Returns:
        CurveDefinition: The curve, or None if the OID is unknown
    """
    return get_registry().lookup_by_oid(oid)


def lookup_by_name(name):
    """
    Look up a curve by any of its names (e.g. 'secp384r1' or 'NIST P-384').

    Returns:
        CurveDefinition: The curve, or None if the name is unknown
    """
    return get_registry().lookup_by_name(name)


def lookup(name):
    return get_registry().lookup(name)


def lookup_by_length(bits):
    """
    Return the curve to use for a given field size.

    If a NIST recommended curve of that size is known it is returned,
    otherwise the first curve registered with that size.

    Returns:
        CurveDefinition: The curve, or None if no curve has that size
    """
    return get_registry().lookup_by_length(bits)


def identify(field, a, b, x, y, n, h):
    """Return the OID of the known curve with these domain parameters, or None."""
    return get_registry().identify(field, a, b, x, y, n, h)


def identify_ecpy_curve(curve):
    """
    Return the OID of an ecpy curve, matched on its domain parameters.

    Args:
        curve (ecpy.curves.Curve): Curve, typically from Curve.get_curve()

    Returns:
        str: OID of the matching curve, or None
    """
    if curve is None:
        return None
    generator = curve.generator
    return identify(curve.field, curve.a, curve.b, generator.x, generator.y,
                    curve.order, curve.cofactor)


def oid_from_public_key(public_key):
    """
    Return the curve OID of an EC public key.

    The key only carries a curve name, so its domain parameters are taken
    from ecpy and matched against the registry; a curve ecpy renames or
    defines differently is therefore not recognised.

    Args:
        public_key: EllipticCurvePublicKey from the cryptography library

    Returns:
        str: OID of the curve, or None if it is not a known curve
    """
    curve_name = public_key.public_numbers().curve.name
    curve = Curve.get_curve(curve_name)
    if curve is None:
        logger.debug(f"ecpy does not know curve {curve_name}")
        return None
    return identify_ecpy_curve(curve)


def cryptography_curve(curve):
    """
    Return the cryptography curve instance for a CurveDefinition.

    Raises:
        LookupError: If cryptography has no curve for the OID
    """
    return ec.get_curve_for_oid(ObjectIdentifier(curve.oid))()
