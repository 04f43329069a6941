"""Tests for Django system checks in the pagerduty app."""

from django.test import SimpleTestCase, override_settings

from apps.pagerduty.checks import check_custom_details, check_plugin_arguments

VALID_INCIDENT_CONFIG = {
    "routing_key": "K",
    "incident_summary": "S",
    "incident_source": "Src",
    "incident_severity": "critical",
    "dedup_key": "D",
    "job_status": "failed",
    "create_change_event": False,
    "custom_details": "",
}


class PluginArgumentsCheckTests(SimpleTestCase):
    @override_settings(PAGERDUTY_PLUGIN=VALID_INCIDENT_CONFIG)
    def test_valid_config_passes(self):
        self.assertEqual(check_plugin_arguments(app_configs=None), [])

    @override_settings(PAGERDUTY_PLUGIN={**VALID_INCIDENT_CONFIG, "routing_key": ""})
    def test_missing_routing_key_is_reported(self):
        errors = check_plugin_arguments(app_configs=None)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].id, "pagerduty.E001")
        self.assertIn("routing_key", errors[0].hint)

    @override_settings(PAGERDUTY_PLUGIN={**VALID_INCIDENT_CONFIG, "incident_severity": "high"})
    def test_invalid_severity_is_reported(self):
        errors = check_plugin_arguments(app_configs=None)
        self.assertEqual(errors[0].id, "pagerduty.E001")
        self.assertIn("high", errors[0].hint)

    @override_settings(PAGERDUTY_PLUGIN={"routing_key": "K", "create_change_event": True})
    def test_change_event_config_passes(self):
        self.assertEqual(check_plugin_arguments(app_configs=None), [])


class CustomDetailsCheckTests(SimpleTestCase):
    @override_settings(PAGERDUTY_PLUGIN={**VALID_INCIDENT_CONFIG, "custom_details": '{"a": 1}'})
    def test_valid_json_object_passes(self):
        self.assertEqual(check_custom_details(app_configs=None), [])

    @override_settings(PAGERDUTY_PLUGIN=VALID_INCIDENT_CONFIG)
    def test_empty_details_pass(self):
        self.assertEqual(check_custom_details(app_configs=None), [])

    @override_settings(PAGERDUTY_PLUGIN={**VALID_INCIDENT_CONFIG, "custom_details": "invalid-json"})
    def test_invalid_json_is_reported(self):
        errors = check_custom_details(app_configs=None)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].id, "pagerduty.E002")
