"""
Management command to run the PagerDuty plugin for one CI job.

Settings come from PLUGIN_* environment variables (see config/settings.py);
any option given on the command line overrides the matching setting.

Usage:
    python manage.py run_plugin
    python manage.py run_plugin --job-status failed --dedup-key build-42
    python manage.py run_plugin --create-change-event --custom-details '{"version": "1.2.3"}'
    python manage.py run_plugin --json
"""

import json
import uuid
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.pagerduty.client import EventsAPIClient
from apps.pagerduty.dispatcher import execute
from apps.pagerduty.dtos import ExecutionContext, InvocationArgs
from apps.pagerduty.exceptions import PluginError

# Options that map one-to-one onto PAGERDUTY_PLUGIN keys
STRING_OPTIONS = (
    "routing_key",
    "incident_summary",
    "incident_source",
    "incident_severity",
    "dedup_key",
    "job_status",
    "custom_details",
)

# Boolean flags; the --no-* variants store False
FLAG_OPTIONS = ("create_change_event", "resolve_incident")


class Command(BaseCommand):
    help = "Trigger, resolve or record a PagerDuty event for a CI job"

    # Validation errors are reported by the dispatcher itself.
    requires_system_checks = []

    def add_arguments(self, parser):
        parser.add_argument("--routing-key", type=str, help="PagerDuty integration routing key.")
        parser.add_argument("--incident-summary", type=str, help="Incident summary text.")
        parser.add_argument("--incident-source", type=str, help="Incident source.")
        parser.add_argument(
            "--incident-severity",
            type=str,
            help="Incident severity: critical, error, warning or info.",
        )
        parser.add_argument("--dedup-key", type=str, help="Incident deduplication key.")
        parser.add_argument(
            "--job-status",
            type=str,
            help="CI job status: success, failed, running, aborted or expired.",
        )
        parser.add_argument(
            "--custom-details",
            type=str,
            help="Change event custom details as a JSON object.",
        )
        parser.add_argument(
            "--create-change-event",
            action="store_true",
            default=None,
            help="Create a change event instead of an incident.",
        )
        parser.add_argument(
            "--resolve-incident",
            action="store_true",
            default=None,
            help="Resolve the incident for failed/aborted/expired jobs.",
        )
        parser.add_argument(
            "--no-create-change-event",
            action="store_false",
            dest="create_change_event",
            default=None,
            help="Send an incident event even if PLUGIN_CREATE_CHANGE_EVENT is set.",
        )
        parser.add_argument(
            "--no-resolve-incident",
            action="store_false",
            dest="resolve_incident",
            default=None,
            help="Do not resolve failed/aborted/expired jobs even if PLUGIN_RESOLVE_INCIDENT is set.",
        )
        parser.add_argument("--events-api-url", type=str, help="Events API base URL.")
        parser.add_argument("--timeout", type=int, help="HTTP timeout in seconds.")
        parser.add_argument(
            "--json",
            action="store_true",
            dest="json_output",
            help="Output result as JSON.",
        )

    def handle(self, *args, **options):
        config = self._build_config(options)
        invocation = InvocationArgs.from_dict(config)

        client = EventsAPIClient(
            base_url=config.get("events_api_url") or None,
            timeout=config.get("timeout") or None,
        )
        context = ExecutionContext(
            trace_id=str(uuid.uuid4()),
            timeout=config.get("timeout") or None,
        )

        try:
            result = execute(context, client, invocation)
        except PluginError as e:
            raise CommandError(str(e))

        if options["json_output"]:
            self.stdout.write(json.dumps({**context.to_dict(), **result.to_dict()}, indent=2))
            return

        if result.client_called:
            self.stdout.write(
                self.style.SUCCESS(f"✓ PagerDuty {result.action.replace('_', ' ')} sent")
            )
            if result.summary:
                self.stdout.write(f"  Summary: {result.summary}")
            if result.message_id:
                self.stdout.write(f"  Dedup key: {result.message_id}")
        else:
            self.stdout.write(
                self.style.WARNING(f"Unknown job status '{invocation.job_status}', no action taken")
            )

    def _build_config(self, options: dict[str, Any]) -> dict[str, Any]:
        """Merge settings.PAGERDUTY_PLUGIN with command-line overrides."""
        config = dict(getattr(settings, "PAGERDUTY_PLUGIN", {}))

        for key in STRING_OPTIONS + FLAG_OPTIONS + ("events_api_url", "timeout"):
            if options.get(key) is not None:
                config[key] = options[key]

        return config
