"""Address grammar, syntax tree, and evaluation into line ranges."""

from . import ast
from .context import AddressContext
from .errors import (
    AddressError,
    EmptyBufferError,
    InvalidPatternError,
    PatternTimeoutError,
    RangeTooLargeError,
)
from .evaluator import AddressEvaluator, evaluate, evaluate_prefix
from .parser import AddressParser, ParseResult, parse_address
from .ranges import LineRange

__all__ = [
    "ast",
    "AddressContext",
    "AddressError",
    "AddressEvaluator",
    "AddressParser",
    "EmptyBufferError",
    "InvalidPatternError",
    "LineRange",
    "ParseResult",
    "PatternTimeoutError",
    "RangeTooLargeError",
    "evaluate",
    "evaluate_prefix",
    "parse_address",
]
