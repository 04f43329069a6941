"""Errors raised while dispatching a plugin invocation.

Every error is terminal for the invocation: nothing is retried.

Public API:
- PluginError
- PluginConfigurationError and its Missing*/InvalidSeverity subclasses
- CustomDetailsParseError
- ClientCallError
"""

from __future__ import annotations


class PluginError(Exception):
    """Base class for all plugin failures."""


class PluginConfigurationError(PluginError):
    """The invocation arguments are incomplete or invalid."""


class MissingRoutingKeyError(PluginConfigurationError):
    def __init__(self) -> None:
        super().__init__("missing required parameter: routing_key")


class MissingDedupKeyError(PluginConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "missing required parameter: dedup_key when not creating a change event"
        )


class MissingJobStatusError(PluginConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "missing required parameter: job_status when not creating a change event"
        )


class MissingSummaryError(PluginConfigurationError):
    def __init__(self) -> None:
        super().__init__("missing required parameter: incident_summary")


class MissingSourceError(PluginConfigurationError):
    def __init__(self) -> None:
        super().__init__("missing required parameter: incident_source")


class InvalidSeverityError(PluginConfigurationError):
    def __init__(self, severity: str) -> None:
        self.severity = severity
        super().__init__(
            f"invalid severity value '{severity}'; "
            "allowed values are 'critical', 'error', 'warning', 'info'"
        )


class CustomDetailsParseError(PluginError):
    """The custom details string is not a JSON object."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to parse custom details JSON: {reason}")


class ClientCallError(PluginError):
    """
    An incident client operation failed.

    Attributes:
        operation: "trigger", "resolve" or "change_event"
        error: Error text reported by the client
    """

    OPERATION_LABELS = {
        "trigger": "trigger incident",
        "resolve": "resolve incident",
        "change_event": "create change event",
    }

    def __init__(self, operation: str, error: str) -> None:
        self.operation = operation
        self.error = error
        label = self.OPERATION_LABELS.get(operation, operation)
        super().__init__(f"failed to {label}: {error}")
