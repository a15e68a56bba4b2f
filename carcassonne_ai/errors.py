"""Recoverable rules errors raised by the board view and the referee."""
from __future__ import annotations

from enum import Enum


class ErrorReason(str, Enum):
    NO_CONNECTING_TILE = "no connecting tile"
    FEATURES_MISMATCH = "features don't match"
    FEATURE_NON_EMPTY = "feature is non-empty"
    NON_SCORING_FEATURE = "illegal meeple on non-scoring feature"
    OUT_OF_MEEPLES = "out of meeples"
    NO_TILE_PRESENT = "no tile present"
    DRAW_SOURCE_EMPTY = "draw source empty"
    WRONG_PHASE = "wrong phase"


class RulesViolation(ValueError):
    """Raised when a move request violates the rules.

    The referee is left untouched, so the same player may retry.
    """

    reason: ErrorReason = ErrorReason.WRONG_PHASE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason.value)


class NoConnectingTileError(RulesViolation):
    reason = ErrorReason.NO_CONNECTING_TILE


class FeaturesMismatchError(RulesViolation):
    reason = ErrorReason.FEATURES_MISMATCH


class FeatureNonEmptyError(RulesViolation):
    reason = ErrorReason.FEATURE_NON_EMPTY


class NonScoringFeatureError(RulesViolation):
    reason = ErrorReason.NON_SCORING_FEATURE


class OutOfMeeplesError(RulesViolation):
    reason = ErrorReason.OUT_OF_MEEPLES


class NoTilePresentError(RulesViolation):
    reason = ErrorReason.NO_TILE_PRESENT


class DrawSourceEmptyError(RulesViolation):
    reason = ErrorReason.DRAW_SOURCE_EMPTY


class WrongPhaseError(RulesViolation):
    reason = ErrorReason.WRONG_PHASE


class ReplayError(RuntimeError):
    """Raised when a replay file cannot be read, parsed or written."""


__all__ = [
    "ErrorReason",
    "RulesViolation",
    "NoConnectingTileError",
    "FeaturesMismatchError",
    "FeatureNonEmptyError",
    "NonScoringFeatureError",
    "OutOfMeeplesError",
    "NoTilePresentError",
    "DrawSourceEmptyError",
    "WrongPhaseError",
    "ReplayError",
]
