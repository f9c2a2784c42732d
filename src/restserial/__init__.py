"""
Typed decoding of JSON HTTP responses.
"""

from importlib import metadata as _metadata

from .async_completion import AsyncCompletionAdapter, AsyncResponseRequest
from .completion import CompletionAdapter, ResponseRequest
from .config import DecoderConfig
from .decodable import JSONDecodable, decode_node
from .decoder import ArraySerializer, ObjectSerializer, decode_array, decode_object
from .error_code import Code
from .errors import (
    APIError,
    IndexOutOfRangeError,
    InvalidSegmentError,
    KeyNotFoundError,
    NotAnArrayError,
    PathError,
    PathTooLongError,
    RestSerialError,
    TransportError,
    UnexpectedSubscriptError,
)
from .path import PathSegment, navigate
from .result import Error, Result
from .sniffers import EnvelopeSniffer, envelope_sniffer
from .transport import RawResponse

__all__ = [
    "AsyncCompletionAdapter",
    "AsyncResponseRequest",
    "CompletionAdapter",
    "ResponseRequest",
    "DecoderConfig",
    "JSONDecodable",
    "decode_node",
    "ArraySerializer",
    "ObjectSerializer",
    "decode_array",
    "decode_object",
    "Code",
    "APIError",
    "IndexOutOfRangeError",
    "InvalidSegmentError",
    "KeyNotFoundError",
    "NotAnArrayError",
    "PathError",
    "PathTooLongError",
    "RestSerialError",
    "TransportError",
    "UnexpectedSubscriptError",
    "PathSegment",
    "navigate",
    "Error",
    "Result",
    "EnvelopeSniffer",
    "envelope_sniffer",
    "RawResponse",
    "__version__",
]

try:
    __version__ = _metadata.version("restserial")
except _metadata.PackageNotFoundError:  # pragma: no cover - local/checkout usage
    __version__ = "0.0.0"
