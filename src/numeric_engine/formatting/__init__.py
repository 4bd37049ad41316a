"""Canonicalizer, clamp, stepper and number conversions."""

from .canonicalizer import PIPELINE, canonicalize, split_sign
from .clamp import REJECTED, UNCHANGED, ClampOutcome, ClampPhase, clamp, nearest_bound
from .numbers import (
    count_leading_zeros,
    format_number,
    fraction_digits,
    pad_leading_zeros,
    parse_numeric,
    unformat,
)
from .stepper import StepDirection, step

__all__ = [
    "ClampOutcome",
    "ClampPhase",
    "PIPELINE",
    "REJECTED",
    "StepDirection",
    "UNCHANGED",
    "canonicalize",
    "clamp",
    "count_leading_zeros",
    "format_number",
    "fraction_digits",
    "nearest_bound",
    "pad_leading_zeros",
    "parse_numeric",
    "split_sign",
    "step",
    "unformat",
]
