"""
EIK (Bulgarian unified identification code) validation.

An EIK has 9 digits (companies) or 13 digits (branches). The 9th digit is a
mod-11 checksum over the first eight; a 13-digit code additionally carries a
second checksum over digits 9..12 in its last position.

Both checksums use the same rule: weight the digits, take ``sum % 11``; a
remainder of 10 is recomputed with a second set of weights, and if it is
still 10 the check digit is 0.
"""

from __future__ import annotations

import re
from typing import Sequence

EIK_WEIGHTS = (1, 2, 3, 4, 5, 6, 7, 8)
EIK_FALLBACK_WEIGHTS = (3, 4, 5, 6, 7, 8, 9, 10)
BRANCH_WEIGHTS = (2, 7, 3, 5)
BRANCH_FALLBACK_WEIGHTS = (4, 9, 5, 7)

VALID_LENGTHS = (9, 13)

_DIGITS = re.compile(r"[0-9]+")


class EikFormatError(ValueError):
    """Raised when a value is not shaped like an EIK at all."""

    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_LENGTH = "INVALID_LENGTH"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


def eik_checksum(digits: Sequence[int], weights: Sequence[int], fallback: Sequence[int]) -> int:
    """
    Compute a mod-11 check digit.

    Args:
        digits: Digits covered by the checksum
        weights: Primary weights, one per digit
        fallback: Weights used when the primary remainder is 10

    Returns:
        The expected check digit (0-9)
    """
    if len(digits) != len(weights) or len(weights) != len(fallback):
        raise ValueError("digits and weights must have the same length")

    checksum = sum(d * w for d, w in zip(digits, weights)) % 11
    if checksum == 10:
        checksum = sum(d * w for d, w in zip(digits, fallback)) % 11
        if checksum == 10:
            checksum = 0
    return checksum


def _normalize(value: str) -> str:
    eik = value.strip()
    if not _DIGITS.fullmatch(eik):
        raise EikFormatError(EikFormatError.INVALID_FORMAT, "EIK must contain only digits")
    if len(eik) not in VALID_LENGTHS:
        raise EikFormatError(EikFormatError.INVALID_LENGTH, "EIK must be 9 or 13 digits")
    return eik


def _checksum_matches(digits: list[int]) -> bool:
    if digits[8] != eik_checksum(digits[:8], EIK_WEIGHTS, EIK_FALLBACK_WEIGHTS):
        return False
    if len(digits) == 13:
        return digits[12] == eik_checksum(digits[8:12], BRANCH_WEIGHTS, BRANCH_FALLBACK_WEIGHTS)
    return True


def check_eik(value: str) -> bool:
    """
    Validate an EIK, distinguishing malformed input from a bad checksum.

    Args:
        value: Candidate EIK; surrounding whitespace is ignored

    Returns:
        True when the checksum(s) match, False otherwise

    Raises:
        EikFormatError: If the value is not 9 or 13 ASCII digits
    """
    eik = _normalize(value)
    return _checksum_matches([int(c) for c in eik])


def is_valid_eik(value: str | None) -> bool:
    """Return True only for a well-formed EIK with matching checksum(s)."""
    if not value:
        return False
    try:
        return check_eik(value)
    except EikFormatError:
        return False
