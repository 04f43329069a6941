"""
Plugin dispatcher.

Validates the invocation arguments, decides which PagerDuty operation a job
outcome maps to, and performs that single operation through an incident
client:

    change event?  ── yes ──> send change event
         │
         no
         │
    job status ──> success/running ──> resolve
               ──> failed/aborted/expired ──> resolve if requested, else trigger
               ──> anything else ──> no call
"""

from __future__ import annotations

import json
import logging
from typing import Any

from apps.pagerduty.client import BaseIncidentClient
from apps.pagerduty.dtos import (
    ACTION_CHANGE_EVENT,
    ACTION_NONE,
    ACTION_RESOLVE,
    ACTION_TRIGGER,
    SEVERITIES,
    ChangeEvent,
    DispatchResult,
    ExecutionContext,
    IncidentEvent,
    IncidentPayload,
    InvocationArgs,
)
from apps.pagerduty.exceptions import (
    ClientCallError,
    CustomDetailsParseError,
    InvalidSeverityError,
    MissingDedupKeyError,
    MissingJobStatusError,
    MissingRoutingKeyError,
    MissingSourceError,
    MissingSummaryError,
)

logger = logging.getLogger(__name__)

UNKNOWN_STATUS_PREFIX = "Job status unknown: "

# job status -> (always resolve, summary prefix)
JOB_STATUS_RULES: dict[str, tuple[bool, str]] = {
    "success": (True, "Job succeeded: "),
    "failed": (False, "Job failed: "),
    "running": (True, "Job is unstable: "),
    "aborted": (False, "Job was aborted: "),
    "expired": (False, "Job was aborted: "),
}


def validate_severity(severity: str) -> None:
    """Raise InvalidSeverityError unless severity is a PagerDuty severity."""
    if severity not in SEVERITIES:
        raise InvalidSeverityError(severity)


def validate_args(args: InvocationArgs) -> None:
    """
    Validate invocation arguments, failing on the first violated rule.

    Incident-specific fields are only required when no change event is
    being created.
    """
    if not args.routing_key:
        raise MissingRoutingKeyError()

    if args.create_change_event:
        return

    if not args.dedup_key:
        raise MissingDedupKeyError()
    if not args.job_status:
        raise MissingJobStatusError()
    if not args.incident_summary:
        raise MissingSummaryError()
    if not args.incident_source:
        raise MissingSourceError()
    validate_severity(args.incident_severity)


def parse_custom_details(raw: str) -> dict[str, Any]:
    """Parse the custom details JSON string; empty input gives an empty dict."""
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.error(f"Failed to parse custom details JSON: {e}")
        raise CustomDetailsParseError(str(e)) from e
    if not isinstance(parsed, dict):
        raise CustomDetailsParseError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def resolve_job_status(job_status: str, resolve_requested: bool) -> tuple[bool | None, str]:
    """
    Map a job status to (resolve?, summary prefix).

    Matching ignores case and surrounding whitespace. Returns None for the
    resolve decision when the status is not recognised.
    """
    rule = JOB_STATUS_RULES.get((job_status or "").strip().lower())
    if rule is None:
        return None, UNKNOWN_STATUS_PREFIX
    always_resolve, prefix = rule
    return always_resolve or resolve_requested, prefix


def build_incident_event(args: InvocationArgs, action: str, summary: str) -> IncidentEvent:
    """Build the trigger or resolve event; resolve events carry no payload."""
    payload = None
    if action == ACTION_TRIGGER:
        payload = IncidentPayload(
            summary=summary,
            source=args.incident_source,
            severity=args.incident_severity,
        )
    return IncidentEvent(
        routing_key=args.routing_key,
        action=action,
        dedup_key=args.dedup_key,
        payload=payload,
    )


def build_change_event(args: InvocationArgs) -> ChangeEvent:
    return ChangeEvent(
        routing_key=args.routing_key,
        summary=args.incident_summary,
        source=args.incident_source,
        custom_details=parse_custom_details(args.custom_details),
    )


def _call_client(operation: str, send, event, context) -> dict[str, Any]:
    """Invoke a client operation and convert any failure into ClientCallError."""
    try:
        result = send(event, context)
    except Exception as e:
        logger.exception(f"Incident client raised during {operation}: {e}")
        raise ClientCallError(operation, str(e)) from e

    if not result or not result.get("success"):
        error = (result or {}).get("error") or "Unknown error"
        logger.error(f"Incident client {operation} failed: {error}")
        raise ClientCallError(operation, error)
    return result


def execute(
    context: ExecutionContext | None,
    client: BaseIncidentClient,
    args: InvocationArgs,
) -> DispatchResult:
    """
    Run one plugin invocation.

    Args:
        context: Forwarded unchanged to the client call
        client: Incident client to send events with
        args: Invocation arguments

    Returns:
        DispatchResult describing the action taken.

    Raises:
        PluginError: validation failure, malformed custom details, or a
            failed client call.
    """
    logger.info(f"Starting plugin execution: {args.to_log_fields()}")

    validate_args(args)

    if not args.job_status:
        logger.warning("Job status is empty")

    if args.create_change_event:
        logger.info("Creating change event")
        event = build_change_event(args)
        result = _call_client(ACTION_CHANGE_EVENT, client.send_change_event, event, context)
        logger.info("Change event created successfully")
        return DispatchResult(
            action=ACTION_CHANGE_EVENT,
            summary=event.summary,
            message_id=result.get("message_id", ""),
            metadata=result.get("metadata", {}),
        )

    resolve, prefix = resolve_job_status(args.job_status, args.resolve_incident)
    summary = prefix + args.incident_summary

    if resolve is None:
        logger.warning(f"Unknown job status '{args.job_status}', no action taken")
        return DispatchResult(action=ACTION_NONE, summary=summary)

    action = ACTION_RESOLVE if resolve else ACTION_TRIGGER
    logger.info(f"Job status '{args.job_status}' maps to {action}")

    event = build_incident_event(args, action, summary)
    result = _call_client(action, client.send_incident_event, event, context)

    logger.info("Plugin execution completed successfully")
    return DispatchResult(
        action=action,
        summary=summary,
        message_id=result.get("message_id", ""),
        metadata=result.get("metadata", {}),
    )
