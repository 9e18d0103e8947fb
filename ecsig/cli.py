"""
Command-line front end for the signature, curve and point helpers.

    convert-signature.py der2raw 3006020101020102
    convert-signature.py raw2der --size 32 <hex>
    convert-signature.py curve "NIST P-384"
    convert-signature.py identify -f PEM key.pem
"""

import argparse
import sys

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from ecsig.colors import Colors, colored
from ecsig.curves import lookup, lookup_by_length, oid_from_public_key
from ecsig.der import decode_der, encode_der, pad_raw_signature
from ecsig.logger import get_logger, set_verbose_mode
from ecsig.point import public_key_to_point


def parse_hex(text):
    """Parse a hex string, tolerating whitespace, colons and a 0x prefix."""
    cleaned = "".join(text.split()).replace(":", "")
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    return bytes.fromhex(cleaned)


def load_public_key(file_format, file_name, certificate=False):
    """
    Load an EC public key, or the key of a certificate, from a file.

    Raises:
        ValueError: If the file does not hold an EC public key
    """
    with open(file_name, "rb") as f:
        file_data = f.read()

    if certificate:
        if file_format.lower() == "pem":
            public_key = x509.load_pem_x509_certificate(file_data).public_key()
        else:
            public_key = x509.load_der_x509_certificate(file_data).public_key()
    elif file_format.lower() == "pem":
        public_key = serialization.load_pem_public_key(file_data)
    else:
        public_key = serialization.load_der_public_key(file_data)

    if not isinstance(public_key, ec.EllipticCurvePublicKey):
        raise ValueError(f"{file_name} does not contain an EC public key")
    return public_key


def describe_curve(curve):
    lines = [
        f"name:     {curve.name}",
        f"oid:      {curve.oid}",
        f"type:     {curve.kind}{' (default)' if curve.is_default else ''}",
        f"size:     {curve.field_size} bits",
        f"field:    {curve.field}",
        f"a:        {curve.a}",
        f"b:        {curve.b}",
        f"x:        {curve.x}",
        f"y:        {curve.y}",
        f"n:        {curve.n}",
        f"h:        {curve.h}",
    ]
    return "\n".join(lines)


def cmd_der2raw(args, logger):
    raw = decode_der(parse_hex(args.signature))
    if args.size:
        raw = pad_raw_signature(raw, args.size)
    logger.debug(f"Raw signature is {len(raw)} bytes")
    print(raw.hex())
    return 0


def cmd_raw2der(args, logger):
    der = encode_der(parse_hex(args.signature))
    logger.debug(f"DER signature is {len(der)} bytes")
    print(der.hex())
    return 0


def cmd_curve(args, logger):
    if args.curve.isdigit():
        curve = lookup_by_length(int(args.curve))
    else:
        curve = lookup(args.curve)

    if curve is None:
        print(colored(f"✗ Unknown curve: {args.curve}", Colors.RED))
        return 1
    print(describe_curve(curve))
    return 0


def cmd_identify(args, logger):
    public_key = load_public_key(args.format, args.file, args.certificate)
    logger.debug(f"Key curve: {public_key.curve.name}")
    logger.debug(f"Key point: {public_key_to_point(public_key).hex()}")

    oid = oid_from_public_key(public_key)
    if oid is None:
        print(colored(f"✗ Curve {public_key.curve.name} is not a known curve", Colors.RED))
        return 1
    print(oid)
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Convert ECDSA signatures and look up elliptic curves",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    der2raw = subparsers.add_parser("der2raw", help="DER signature to raw r || s")
    der2raw.add_argument("signature", help="DER signature as hex")
    der2raw.add_argument(
        "-s", "--size",
        type=int,
        default=0,
        help="Pad r and s to this many bytes each"
    )
    der2raw.set_defaults(handler=cmd_der2raw)

    raw2der = subparsers.add_parser("raw2der", help="Raw r || s signature to DER")
    raw2der.add_argument("signature", help="Raw signature as hex")
    raw2der.set_defaults(handler=cmd_raw2der)

    curve = subparsers.add_parser("curve", help="Show a curve by OID, name or field size")
    curve.add_argument("curve", help="OID, curve name or field size in bits")
    curve.set_defaults(handler=cmd_curve)

    identify = subparsers.add_parser("identify", help="Print the curve OID of a public key")
    identify.add_argument(
        "-f", "--format",
        choices=["DER", "PEM"],
        default="PEM",
        help="Key file format (DER or PEM)"
    )
    identify.add_argument(
        "-c", "--certificate",
        action="store_true",
        help="The file is an X.509 certificate rather than a public key"
    )
    identify.add_argument("file", help="Public key or certificate file")
    identify.set_defaults(handler=cmd_identify)

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the signature conversion tool."""
    try:
        args = parse_arguments(argv)

        # Set global verbose mode and get a logger for this module
        set_verbose_mode(args.verbose)
        logger = get_logger()

        if args.verbose:
            logger.debug(f"Running command: {args.command}")

        return args.handler(args, logger)

    except Exception as e:
        print(colored(f"Error: {str(e)}", Colors.RED))
        return 1


if __name__ == "__main__":
    sys.exit(main())
