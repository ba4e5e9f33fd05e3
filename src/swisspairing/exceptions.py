"""Exceptions for use in Swiss Pairing"""

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

from typing import List, Optional


# ========== Base Application Exception ==========


class SwissPairingException(Exception):
    """Base exception for all Swiss Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    The ``code`` attribute is a stable identifier a caller can hand to its clients.
    """

    code = "Unknown"


# ========== Round Generation Exceptions ==========


class RoundGenerationException(SwissPairingException):
    """Base exception for errors refusing or aborting round generation."""

    code = "RoundGenerationError"


class RoundNotReadyException(RoundGenerationException):
    """Raised when the current round still has unsubmitted results."""

    code = "RoundNotReady"

    def __init__(self, round_number: int, pending_boards: Optional[List[int]] = None):
        self.round_number = round_number
        self.pending_boards = list(pending_boards or [])
        super().__init__(
            f"Round {round_number} still has {len(self.pending_boards)} "
            f"game(s) without a result: boards {self.pending_boards}"
        )


class TournamentCompleteException(RoundGenerationException):
    """Raised when every scheduled round has already been generated."""

    code = "TournamentComplete"

    def __init__(self, num_rounds: int):
        self.num_rounds = num_rounds
        super().__init__(f"All {num_rounds} rounds have already been generated")


class InsufficientPlayersException(RoundGenerationException):
    """Raised when fewer than two registrations can be paired."""

    code = "InsufficientPlayers"

    def __init__(self, active_count: int):
        self.active_count = active_count
        super().__init__(
            f"At least 2 active registrations are needed, found {active_count}"
        )


class PairingInfeasibleException(RoundGenerationException):
    """Raised when no valid pairing without rematches can be found.

    ``conflicting_ids`` holds the registrations of the score group where the
    search gave up, so an administrator can intervene manually.
    """

    code = "PairingInfeasible"

    def __init__(self, message: str, conflicting_ids: Optional[List[int]] = None):
        self.conflicting_ids = list(conflicting_ids or [])
        super().__init__(message)


class InvariantViolationException(RoundGenerationException):
    """Raised when an assembled round breaks a global invariant.

    This is an internal bug, never a user error, and the round must not be persisted.
    """

    code = "InvariantViolation"


# ========== Snapshot Exceptions ==========


class SnapshotException(SwissPairingException):
    """Raised when a tournament snapshot is internally inconsistent."""

    code = "InvalidSnapshot"


# ========== Result Exceptions ==========


class ResultException(SwissPairingException):
    """Base exception for result recording errors."""

    code = "ResultError"


class InvalidResultException(ResultException):
    """Raised when a result string or value is not a decided game result."""

    code = "InvalidResult"


class DuplicateResultException(ResultException):
    """Raised when attempting to record a result for an already decided pairing."""

    code = "DuplicateResult"


class ResultNotFoundException(ResultException):
    """Raised when the pairing a result refers to cannot be found."""

    code = "PairingNotFound"


class InvalidRoundException(ResultException):
    """Raised when a result targets a round that is no longer open."""

    code = "InvalidRound"


# ========== Tournament Exceptions ==========


class TournamentException(SwissPairingException):
    """Base exception for tournament-related errors."""

    code = "TournamentError"


class TournamentNotFoundException(TournamentException):
    """Raised when a tournament id is unknown to the store."""

    code = "TournamentNotFound"


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    code = "InvalidTournamentState"


class DuplicatePlayerException(TournamentException):
    """Raised when attempting to register a player twice in one tournament."""

    code = "DuplicateRegistration"


# ========== Player Exceptions ==========


class PlayerException(SwissPairingException):
    """Base exception for player-related errors."""

    code = "PlayerError"


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player or registration cannot be found."""

    code = "PlayerNotFound"


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    code = "InvalidPlayerData"


# ========== Validation Exceptions ==========


class ValidationException(SwissPairingException):
    """Base exception for validation errors."""

    code = "ValidationError"


class RoundCountValidationException(ValidationException):
    """Raised when a tournament is configured with an invalid number of rounds."""

    code = "InvalidNumberOfRounds"


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissPairingException):
    """Base exception for configuration errors."""

    code = "ConfigurationError"


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    code = "InvalidConfiguration"


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    code = "MissingConfiguration"
