"""
Exception hierarchy for the simulation engine.

Expected economic outcomes (forced sale, bankruptcy) are ordinary state
transitions and never raise. These exceptions flag defects: an engine
operation called outside its precondition, a strategy returning an illegal
decision, or invalid configuration.
"""


class MonopolyError(Exception):
    """Base exception for all simulator errors."""


class RuleViolation(MonopolyError, AssertionError):
    """An engine contract was broken (illegal call, cash under/overflow)."""


class ConfigurationError(MonopolyError, ValueError):
    """Configuration or strategy profile is invalid."""
