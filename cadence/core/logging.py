"""
Logging configuration for Cadence using eliot.

This module provides structured logging throughout the backend using eliot,
which provides context-aware logging: every queue operation runs inside an
action, and the messages logged within it carry the action's task id.
"""

import eliot
import logging
import sys
from eliot import log_message, start_action, write_traceback
from eliot.stdlib import EliotHandler
from pathlib import Path

_configured = False


class HumanReadableDestination:
    """Destination that formats logs in a human-readable format."""

    def __init__(self, file):
        self.file = file

    def format(self, message: dict) -> str | None:
        """Render a message as one line, or None to drop it."""
        # Skip internal Eliot messages (action start/status messages)
        if message.get("action_type") and not message.get("message_type"):
            return None

        msg_type = message.get("message_type", "")
        description = message.get("description", "")

        if msg_type == "queue_operation":
            operation = message.get("operation", "")
            user_id = message.get("user_id", "")
            details = ", ".join(
                f"{key}={value}"
                for key, value in sorted(message.items())
                if key not in ("operation", "user_id", "message_type", "timestamp", "task_uuid", "task_level")
            )
            output = f"[QUEUE] {operation} user={user_id}"
            if details:
                output += f" ({details})"
            return output

        if msg_type == "api_request":
            output = f"[API] {message.get('action', '')}"
            if description:
                output += f": {description}"
            return output

        if msg_type == "error_occurred":
            return f"[ERROR] {message.get('error_type', '')}: {message.get('error_message', '')}"

        if msg_type == "database_operation":
            return f"[DB] {message.get('operation', '')} {message.get('table', '')}".rstrip()

        if description:
            return description
        if "message" in message:
            return message["message"]
        return None

    def __call__(self, message):
        """Format and write log message."""
        output = self.format(message)
        if output and output.strip():
            self.file.write(output + "\n")
            self.file.flush()


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """
    Set up eliot logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to (always logs to stdout as well)
    """
    global _configured
    if _configured:
        return

    # Use human-readable output for stdout
    eliot.add_destinations(HumanReadableDestination(sys.stdout))

    # Also log to file if specified (raw JSON format for machine parsing)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        eliot.to_file(open(log_path, "a"))

    # Route stdlib logging (uvicorn, sqlalchemy) through eliot
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.addHandler(EliotHandler())

    _configured = True
    log_message(
        message_type="logging_setup", log_level=log_level, log_file=log_file or "stdout", message="Eliot logging configured"
    )


def get_logger(name: str):
    """
    Get an eliot logger instance for a specific component.

    The returned Logger is meant for start_action(); use log_message() for messages.
    """
    from eliot import Logger

    return Logger()


# Global logger instances for different components
app_logger = get_logger("cadence_app")
queue_logger = get_logger("cadence_queue")
api_logger = get_logger("cadence_api")


def log_queue_operation(operation: str, **context):
    """
    Log queue operations with context.

    Args:
        operation: Queue operation (add, remove, reorder, etc.)
        **context: Additional context data
    """
    log_message(message_type="queue_operation", operation=operation, **context)


def log_database_operation(operation: str, table: str | None = None, **context):
    """
    Log database operations with context.

    Args:
        operation: Type of database operation (SELECT, INSERT, UPDATE, DELETE)
        table: Database table name
        **context: Additional context data
    """
    log_message(message_type="database_operation", operation=operation, table=table, **context)


def log_api_request(action: str, trigger_source: str = "api", **context):
    """
    Log API requests with context.

    Args:
        action: API action being performed
        trigger_source: Source of the request (default: "api")
        **context: Additional context data (request parameters, response, etc.)
    """
    log_message(message_type="api_request", action=action, trigger_source=trigger_source, **context)


def log_error(logger: eliot.Logger, error: Exception, **context):
    """
    Log errors with full context and traceback.

    Args:
        logger: Eliot logger instance
        error: Exception that occurred
        **context: Additional context data
    """
    write_traceback(logger, exc_info=(type(error), error, error.__traceback__))
    log_message(message_type="error_occurred", error_message=str(error), error_type=type(error).__name__, **context)


def queue_action(action_type: str, **fields):
    """Start an eliot action for a queue operation."""
    return start_action(queue_logger, action_type, **fields)
