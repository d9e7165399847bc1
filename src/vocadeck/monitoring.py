"""Monitoring configuration for the flashcard bot."""
from prometheus_client import Counter, Gauge, start_http_server

# Session metrics
active_sessions = Gauge(
    "vocadeck_active_sessions",
    "Number of chats with a flashcard session in memory",
)

cards_shown = Counter(
    "vocadeck_cards_shown_total",
    "Total number of cards rendered",
    ["word_type"],
)

commands = Counter(
    "vocadeck_commands_total",
    "Total number of session commands handled",
    ["command"],
)

# Speech metrics
speech_requests = Counter(
    "vocadeck_speech_requests_total",
    "Total number of read-aloud requests",
    ["lang"],
)

# Error metrics
error_count = Counter(
    "vocadeck_errors_total",
    "Total number of errors encountered",
    ["error_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
