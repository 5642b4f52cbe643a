"""Exception hierarchy for the kata package.

Keep this module small and dependency-free: every exercise module and the CLI
import it.
"""


class KataError(Exception):
    """Base exception for all interview-kata errors."""


class InvalidConfigurationError(KataError):
    """Raised when a component is constructed with invalid parameters."""


class ScenarioError(KataError):
    """Raised for an unreadable or invalid scenario file."""


class ScenarioMismatchError(KataError):
    """Raised when a replayed lookup does not return the expected value."""
