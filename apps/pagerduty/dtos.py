"""
Data Transfer Objects (DTOs) for a plugin invocation.

InvocationArgs is what the caller hands to the dispatcher. IncidentEvent and
ChangeEvent are what the dispatcher hands to an incident client; their
to_dict() output is the PagerDuty Events API v2 request body.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

SEVERITY_CRITICAL = "critical"
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

SEVERITIES = (SEVERITY_CRITICAL, SEVERITY_ERROR, SEVERITY_WARNING, SEVERITY_INFO)

ACTION_TRIGGER = "trigger"
ACTION_RESOLVE = "resolve"
ACTION_CHANGE_EVENT = "change_event"
ACTION_NONE = "none"


@dataclass
class InvocationArgs:
    """Plugin configuration for a single run."""

    routing_key: str = ""
    incident_summary: str = ""
    incident_source: str = ""
    incident_severity: str = ""
    dedup_key: str = ""
    create_change_event: bool = False
    resolve_incident: bool = False
    job_status: str = ""
    custom_details: str = ""  # JSON-encoded object

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvocationArgs:
        """Build args from a settings-style dict, ignoring unknown keys."""
        known = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    def to_log_fields(self) -> dict[str, Any]:
        """Fields safe to log; the routing key is masked."""
        return {
            "routing_key": "X" * 24 if self.routing_key else "",
            "incident_summary": self.incident_summary,
            "incident_source": self.incident_source,
            "incident_severity": self.incident_severity,
            "create_change_event": self.create_change_event,
            "job_status": self.job_status,
        }


@dataclass
class ExecutionContext:
    """
    Per-invocation context passed through to the incident client.

    The dispatcher does not interpret it.
    """

    trace_id: str = ""
    timeout: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class IncidentPayload:
    summary: str
    source: str
    severity: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class IncidentEvent:
    """An Events API v2 trigger or resolve event."""

    routing_key: str
    action: str  # trigger, resolve
    dedup_key: str
    payload: IncidentPayload | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "routing_key": self.routing_key,
            "event_action": self.action,
            "dedup_key": self.dedup_key,
        }
        # Only trigger events carry a payload section
        if self.payload is not None:
            body["payload"] = self.payload.to_dict()
        return body


@dataclass
class ChangeEvent:
    """A Change Events API event."""

    routing_key: str
    summary: str
    source: str
    custom_details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "routing_key": self.routing_key,
            "payload": {
                "summary": self.summary,
                "source": self.source,
                "custom_details": self.custom_details,
            },
        }


@dataclass
class DispatchResult:
    """Outcome of a successful dispatch."""

    action: str  # trigger, resolve, change_event, none
    summary: str = ""
    message_id: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def client_called(self) -> bool:
        return self.action != ACTION_NONE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
