"""Django app configuration for the PagerDuty plugin app."""

from django.apps import AppConfig


class PagerDutyConfig(AppConfig):
    """Configuration for the PagerDuty plugin app."""

    name = "apps.pagerduty"
    verbose_name = "PagerDuty CI Plugin"

    def ready(self):
        # Import checks module to register system checks with Django
        from apps.pagerduty import checks  # noqa: F401
