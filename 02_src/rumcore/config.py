"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_BUSY_DELAY_MS = 100.0
DEFAULT_IDLE_DELAY_MS = 100.0
DEFAULT_DOCUMENT_ORIGIN = "http://localhost"
DEFAULT_MAX_QUEUED_INPUTS = 10
OVERLAP_POLICIES = ("race", "drop", "queue")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class AgentConfig:
    """Runtime settings of the interaction agent."""

    busy_delay: float = DEFAULT_BUSY_DELAY_MS  # ms
    idle_delay: float = DEFAULT_IDLE_DELAY_MS  # ms
    document_origin: str = DEFAULT_DOCUMENT_ORIGIN
    overlap_policy: str = "race"
    track_requests: bool = True
    report_history_size: int = 100
    api_host: str = "localhost"
    api_port: int = 8000

    def __post_init__(self) -> None:
        if self.busy_delay < 0 or self.idle_delay < 0:
            raise ValueError("busy_delay and idle_delay must be >= 0")
        if self.overlap_policy not in OVERLAP_POLICIES:
            raise ValueError(f"Unknown overlap policy: {self.overlap_policy}")
        if self.report_history_size < 1:
            raise ValueError("report_history_size must be >= 1")

    @classmethod
    def from_env(cls) -> "AgentConfig":
        """Build config from environment variables."""
        return cls(
            busy_delay=float(os.getenv("BUSY_DELAY_MS", DEFAULT_BUSY_DELAY_MS)),
            idle_delay=float(os.getenv("IDLE_DELAY_MS", DEFAULT_IDLE_DELAY_MS)),
            document_origin=os.getenv("DOCUMENT_ORIGIN", DEFAULT_DOCUMENT_ORIGIN),
            overlap_policy=os.getenv("OVERLAP_POLICY", "race").lower(),
            track_requests=_env_bool("TRACK_REQUESTS", True),
            report_history_size=int(os.getenv("REPORT_HISTORY_SIZE", "100")),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )
