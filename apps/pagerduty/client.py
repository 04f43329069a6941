"""Incident clients for the PagerDuty Events API v2.

Clients normalize the two outbound operations the dispatcher needs so the
HTTP implementation can be replaced by a fake in tests.

Public API:
- BaseIncidentClient
- EventsAPIClient
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Any

from apps.pagerduty.dtos import ChangeEvent, ExecutionContext, IncidentEvent

logger = logging.getLogger(__name__)


class BaseIncidentClient(ABC):
    """Abstract base class for incident clients."""

    name: str = "base"

    @abstractmethod
    def send_incident_event(
        self, event: IncidentEvent, context: ExecutionContext | None = None
    ) -> dict[str, Any]:
        """Send a trigger or resolve event.

        Args:
            event: The incident event to send
            context: Opaque per-call context (timeout, trace id)

        Returns:
            Dictionary with keys like:
            - success: bool
            - message_id: str (if available)
            - error: str (if failed)
            - metadata: dict (any additional info)
        """

    @abstractmethod
    def send_change_event(
        self, event: ChangeEvent, context: ExecutionContext | None = None
    ) -> dict[str, Any]:
        """Send a change event. Returns the same result shape as send_incident_event."""


class EventsAPIClient(BaseIncidentClient):
    """
    Client for the PagerDuty Events API v2.

    Configuration:
    {
        "events_api_url": "https://events.pagerduty.com",
        "timeout": 30
    }
    """

    name = "pagerduty"

    DEFAULT_BASE_URL = "https://events.pagerduty.com"
    ENQUEUE_PATH = "/v2/enqueue"
    CHANGE_ENQUEUE_PATH = "/v2/change/enqueue"
    DEFAULT_TIMEOUT = 30

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    def send_incident_event(
        self, event: IncidentEvent, context: ExecutionContext | None = None
    ) -> dict[str, Any]:
        result = self._post(self.ENQUEUE_PATH, event.to_dict(), context)
        if result["success"]:
            logger.info(
                f"PagerDuty {event.action} event sent (dedup_key: {result['message_id']})"
            )
            result["metadata"]["event_action"] = event.action
        return result

    def send_change_event(
        self, event: ChangeEvent, context: ExecutionContext | None = None
    ) -> dict[str, Any]:
        result = self._post(self.CHANGE_ENQUEUE_PATH, event.to_dict(), context)
        if result["success"]:
            logger.info(f"PagerDuty change event sent: {event.summary}")
        return result

    def _timeout_for(self, context: ExecutionContext | None) -> float:
        if context is not None and context.timeout:
            return context.timeout
        return self.timeout

    def _post(
        self, path: str, body: dict[str, Any], context: ExecutionContext | None
    ) -> dict[str, Any]:
        """POST a JSON body and normalize the response into a result dict."""
        url = f"{self.base_url}{path}"

        try:
            request = urllib.request.Request(
                url,
                data=json.dumps(body).encode("utf-8"),
                headers={
                    "Content-Type": "application/json",
                },
                method="POST",
            )

            with urllib.request.urlopen(request, timeout=self._timeout_for(context)) as response:
                response_body = response.read().decode("utf-8")
                response_data = json.loads(response_body) if response_body else {}

                # PagerDuty returns status, message and (for incidents) dedup_key
                if response_data.get("status") == "success":
                    dedup_key = response_data.get("dedup_key", "")
                    return {
                        "success": True,
                        "message_id": dedup_key,
                        "metadata": {
                            "dedup_key": dedup_key,
                            "message": response_data.get("message", ""),
                        },
                    }
                else:
                    error_msg = response_data.get("message", "Unknown error")
                    logger.warning(f"PagerDuty error: {error_msg}")
                    return {
                        "success": False,
                        "error": f"PagerDuty error: {error_msg}",
                    }

        except urllib.error.HTTPError as e:
            return self._handle_http_error(e)
        except urllib.error.URLError as e:
            logger.error(f"PagerDuty URL error: {e.reason}")
            return {
                "success": False,
                "error": f"Failed to connect to PagerDuty: {e.reason}",
            }
        except Exception as e:
            logger.exception(f"Failed to send PagerDuty event: {e}")
            return {
                "success": False,
                "error": f"Failed to send PagerDuty event: {e}",
            }

    def _handle_http_error(self, e: urllib.error.HTTPError) -> dict[str, Any]:
        error_body = e.read().decode("utf-8", errors="replace") if e.fp else str(e)
        logger.error(f"PagerDuty HTTP error {e.code}: {error_body}")

        # Parse error response if JSON
        try:
            error_data = json.loads(error_body)
            error_msg = error_data.get("message", error_body)
            if error_data.get("errors"):
                error_msg = f"{error_msg} ({'; '.join(map(str, error_data['errors']))})"
        except (json.JSONDecodeError, AttributeError):
            error_msg = error_body

        return {
            "success": False,
            "error": f"PagerDuty API error ({e.code}): {error_msg}",
        }
