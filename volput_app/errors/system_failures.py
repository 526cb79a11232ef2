"""
System failure error classifications.

These exceptions represent misuse of the core functions (arguments outside
their supported domain) and failures in the output collaborators.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidInputError(SystemFailureError):
    """A function or configuration value was given an argument outside its domain."""

    def __init__(self, message: str, parameter: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.parameter = parameter
        self.value = value


class ReportingError(SystemFailureError):
    """Summary or chart output could not be produced."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
