"""Domain strategies."""

from .value_codec_strategy import (
    CodecFactory,
    Int16Codec,
    Int32Codec,
    NumberCodecStrategy,
    UInt16Codec,
    UInt32Codec,
)

__all__ = [
    "NumberCodecStrategy",
    "UInt16Codec",
    "Int16Codec",
    "UInt32Codec",
    "Int32Codec",
    "CodecFactory",
]
