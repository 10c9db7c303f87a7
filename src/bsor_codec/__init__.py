"""BSOR Codec - Binary replay decoder and encoder."""
from .const import ERRORS, ReplayDecodeError
from .decode import ReplayDecoder, decode, decode_with_stats
from .encode import encode

__all__ = [
    "ERRORS",
    "ReplayDecodeError",
    "ReplayDecoder",
    "decode",
    "decode_with_stats",
    "encode",
]
