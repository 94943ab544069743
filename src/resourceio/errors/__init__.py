"""resourceio error ADTs.

Every failure an operation can report is one of the frozen dataclasses below;
``ResourceError`` is their union and is what ``Failure`` carries.
"""

from resourceio.errors.access import LocalIOError, PermanentAccessError, TransientAccessError
from resourceio.errors.address import InvalidAddress, ParseError
from resourceio.errors.codec import CompressionError, DecodeError
from resourceio.errors.operation import InvalidConfig, UnsupportedOperation

ResourceError = (
    InvalidAddress
    | TransientAccessError
    | PermanentAccessError
    | LocalIOError
    | CompressionError
    | DecodeError
    | UnsupportedOperation
)

__all__ = [
    "InvalidAddress",
    "ParseError",
    "TransientAccessError",
    "PermanentAccessError",
    "LocalIOError",
    "CompressionError",
    "DecodeError",
    "UnsupportedOperation",
    "InvalidConfig",
    "ResourceError",
]
