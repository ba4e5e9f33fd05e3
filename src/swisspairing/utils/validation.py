"""Validation utilities for Swiss Pairing.

This module provides reusable validation functions with consistent error handling.
"""

# Swiss Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Optional

from swisspairing.constants import (
    MAX_NUM_ROUNDS,
    MAX_RATING,
    MIN_NUM_ROUNDS,
    VALID_BYE_SCORES,
)
from swisspairing.exceptions import RoundCountValidationException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Rating Validation ==========


def validate_rating(
    rating: Optional[int], min_rating: int = 0, max_rating: int = MAX_RATING
) -> ValidationResult:
    """Validate a chess rating.

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with validation status
    """
    if rating is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        rating_int = int(rating)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=str(rating_int))


# ========== FIDE ID Validation ==========


def validate_fide_id(fide_id: Optional[str], required: bool = False) -> ValidationResult:
    """Validate a FIDE ID.

    FIDE IDs are positive integers, typically 6-8 digits.
    """
    if fide_id is None or not str(fide_id).strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="FIDE ID is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    fide_id_str = str(fide_id).strip()

    try:
        fide_id_int = int(fide_id_str)
        if fide_id_int <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="FIDE ID must be a positive number",
            )
        return ValidationResult(is_valid=True, sanitized_value=str(fide_id_int))
    except ValueError:
        return ValidationResult(
            is_valid=False,
            error_message=f"FIDE ID must be a number: {fide_id_str}",
        )


# ========== Round Count Validation ==========


def validate_num_rounds(num_rounds: Optional[int]) -> ValidationResult:
    """Validate the number of rounds of a Swiss tournament.

    Args:
        num_rounds: Planned number of rounds

    Returns:
        ValidationResult with validation status
    """
    if num_rounds is None:
        return ValidationResult(
            is_valid=False,
            error_message="Number of rounds is required",
        )

    try:
        rounds_int = int(num_rounds)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Number of rounds must be a number: {num_rounds}",
        )

    if rounds_int < MIN_NUM_ROUNDS or rounds_int > MAX_NUM_ROUNDS:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Cannot create tournament with {rounds_int} rounds, "
                f"must be between {MIN_NUM_ROUNDS} and {MAX_NUM_ROUNDS}"
            ),
        )

    return ValidationResult(is_valid=True, sanitized_value=str(rounds_int))


def validate_num_rounds_strict(num_rounds: int) -> int:
    """Validate the number of rounds and return it or raise exception.

    Raises:
        RoundCountValidationException: If the round count is invalid
    """
    result = validate_num_rounds(num_rounds)
    if not result.is_valid:
        raise RoundCountValidationException(result.error_message)
    return int(result.sanitized_value or "0")


# ========== Score Validation ==========


def validate_score(score: float) -> ValidationResult:
    """Validate a credited score (must be 0.0, 0.5, or 1.0).

    Args:
        score: Score to validate

    Returns:
        ValidationResult with validation status
    """
    try:
        float_score = float(score)
        if float_score not in VALID_BYE_SCORES:
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be 0.0, 0.5, or 1.0: {score}",
            )
        return ValidationResult(is_valid=True, sanitized_value=str(float_score))
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a number: {score}",
        )


def validate_positive_integer(
    value: Optional[int], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    try:
        int_value = int(value)
        if int_value <= 0:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} must be positive",
            )
        return ValidationResult(is_valid=True, sanitized_value=str(int_value))
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )
