"""Line-address expression engine for ed/sam-style editors."""

from .address import LineRange, evaluate, evaluate_prefix, parse_address

__all__ = [
    "address",
    "buffer",
    "runtime",
    "LineRange",
    "evaluate",
    "evaluate_prefix",
    "parse_address",
]

__version__ = "0.1.0"
