"""Conversion between flat block records and nested block chains."""

from .blocks import BlockGraphCodec, decode, encode

__all__ = ["BlockGraphCodec", "decode", "encode"]
