"""Canonical logging field names.

These constants define a stable key set for structured logs and context
propagation so CLI output and library logs share one vocabulary.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Common process-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"

# Per-invocation fields bound by the CLI.
COMMAND = "command"
VARIANT = "variant"
