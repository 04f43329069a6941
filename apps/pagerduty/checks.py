"""
Django system checks for the PagerDuty plugin.

These checks validate the PLUGIN_* configuration without contacting
PagerDuty, so a pipeline can fail early on a misconfigured step.

Usage:
    python manage.py check --tag pagerduty
"""

from django.core.checks import Error, register

from apps.pagerduty.dispatcher import parse_custom_details, validate_args
from apps.pagerduty.dtos import InvocationArgs
from apps.pagerduty.exceptions import CustomDetailsParseError, PluginConfigurationError


def _configured_args() -> InvocationArgs:
    from django.conf import settings

    return InvocationArgs.from_dict(getattr(settings, "PAGERDUTY_PLUGIN", {}))


@register("pagerduty")
def check_plugin_arguments(app_configs, **kwargs):
    """Check that the configured arguments pass dispatcher validation."""
    errors = []
    args = _configured_args()

    try:
        validate_args(args)
    except PluginConfigurationError as e:
        errors.append(
            Error(
                "PagerDuty plugin configuration is invalid",
                hint=f"Check the PLUGIN_* environment variables. Error: {e}",
                id="pagerduty.E001",
            )
        )

    return errors


@register("pagerduty")
def check_custom_details(app_configs, **kwargs):
    """Check that PLUGIN_CUSTOM_DETAILS, when set, is a JSON object."""
    errors = []
    args = _configured_args()

    try:
        parse_custom_details(args.custom_details)
    except CustomDetailsParseError as e:
        errors.append(
            Error(
                "PLUGIN_CUSTOM_DETAILS is not a valid JSON object",
                hint=str(e),
                id="pagerduty.E002",
            )
        )

    return errors
