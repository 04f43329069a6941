"""
Django settings for the drone-pagerduty plugin.

The plugin has no database, no HTTP views and no templates; Django provides
the management command runner, system checks and logging configuration.
Plugin inputs are read from PLUGIN_* environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

from config.env import env_bool, env_int, env_log_level, load_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_env(BASE_DIR)

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "drone-pagerduty-insecure-key")

DEBUG = env_bool("DJANGO_DEBUG")

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "apps.pagerduty",
]

DATABASES: dict = {}

USE_TZ = True

# Logging
PLUGIN_LOG_LEVEL = env_log_level("PLUGIN_LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plugin": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plugin",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": PLUGIN_LOG_LEVEL,
    },
}

# PagerDuty plugin inputs
PAGERDUTY_PLUGIN = {
    "routing_key": os.environ.get("PLUGIN_ROUTING_KEY", ""),
    "incident_summary": os.environ.get("PLUGIN_INCIDENT_SUMMARY", ""),
    "incident_source": os.environ.get("PLUGIN_INCIDENT_SOURCE", ""),
    "incident_severity": os.environ.get("PLUGIN_INCIDENT_SEVERITY", ""),
    "dedup_key": os.environ.get("PLUGIN_DEDUP_KEY", ""),
    "create_change_event": env_bool("PLUGIN_CREATE_CHANGE_EVENT"),
    "resolve_incident": env_bool("PLUGIN_RESOLVE_INCIDENT"),
    "job_status": os.environ.get("PLUGIN_JOB_STATUS", ""),
    "custom_details": os.environ.get("PLUGIN_CUSTOM_DETAILS", ""),
    "events_api_url": os.environ.get("PLUGIN_EVENTS_API_URL", ""),
    "timeout": env_int("PLUGIN_TIMEOUT", 30),
}
