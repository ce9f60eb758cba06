"""Exception types for the Comet rates pipeline."""

from __future__ import annotations


class DecodeConfigurationError(ValueError):
    """Raised when a slot layout does not fit inside a 32-byte storage word."""


class Uint248OverflowError(OverflowError):
    """Raised when a value falls outside the unsigned 248-bit working range."""


class ConstraintViolation(Exception):
    """Raised when claimed public outputs disagree with their public inputs."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"constraint violations: {', '.join(violations)}")
