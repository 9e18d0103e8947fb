"""
Exceptions raised by the signature, point and curve modules.

Codec errors all derive from ValueError so callers that only care about
"bad input" can catch that; ConfigurationError signals a broken curve table
and is never expected at runtime.
"""


class ECSigError(Exception):
    pass


class MalformedSignature(ECSigError, ValueError):
    """The bytes are not a DER SEQUENCE of two INTEGERs this codec accepts."""


class SignatureTooLarge(ECSigError, ValueError):
    """The DER form would need a length field wider than one byte."""


class UnsupportedPointFormat(ECSigError, ValueError):
    """The point does not start with the uncompressed format byte."""


class MalformedPoint(ECSigError, ValueError):
    """The point length does not match the field size."""


class ConfigurationError(ECSigError, RuntimeError):
    """Duplicate OID or curve name in the curve table."""
