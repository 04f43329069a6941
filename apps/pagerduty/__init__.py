"""
PagerDuty CI plugin app.

Turns a CI job outcome into exactly one PagerDuty operation:
trigger an incident, resolve an incident, or record a change event.

Key concepts:
- InvocationArgs carry the plugin configuration for a single run
- The dispatcher validates the arguments and picks the action from job status
- Incident clients talk to the PagerDuty Events API v2 and can be swapped in tests
"""
