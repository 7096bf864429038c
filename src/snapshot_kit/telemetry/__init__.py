"""telemetry: JSONL event logging for snapshot runs."""
from .logger import SnapshotEventLogger  # noqa: F401
