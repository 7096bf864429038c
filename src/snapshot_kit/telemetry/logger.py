"""Structured JSONL event logging for snapshot runs."""
import json
import logging
import os
import time

log = logging.getLogger(__name__)


class SnapshotEventLogger:
    """Writes one JSON line per event to a per-run JSONL file.

    All logging is best-effort; methods never raise exceptions.
    Supports context-manager protocol for automatic close.
    """

    def __init__(self, run_id: str, log_dir: str = "data/logs/snapshot_events"):
        self._run_id = run_id
        self._f = None
        self._counts: dict[str, int] = {}
        try:
            os.makedirs(log_dir, exist_ok=True)
            safe_run_id = run_id.replace("/", "_").replace("\\", "_")
            path = os.path.join(log_dir, f"{safe_run_id}.jsonl")
            self._f = open(path, "a", encoding="utf-8")
        except Exception as e:
            log.warning(f"SnapshotEventLogger: failed to open log file: {e}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _write(self, event: dict):
        if self._f is None:
            return
        try:
            event["ts"] = time.time()
            event["run_id"] = self._run_id
            self._f.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._f.flush()
        except Exception as e:
            log.warning(f"SnapshotEventLogger: write failed: {e}")

    def log_save_start(self, url: str, path: str, save_as: str):
        self._write({
            "event": "save_start",
            "url": url,
            "path": path,
            "save_as": save_as,
        })

    def log_save_result(self, url: str, path: str, status: str, elapsed: float,
                        error: str = "", stage: str | None = None,
                        inlined: int | None = None, inline_failed: int | None = None):
        """Log the outcome of one save.

        Valid ``status`` values are those of ``SaveStatus``: ``saved``,
        ``skipped``, ``failed``. ``inlined``/``inline_failed`` are only set
        for HTML saves.
        """
        self._counts[status] = self._counts.get(status, 0) + 1
        self._write({
            "event": "save_result",
            "url": url,
            "path": path,
            "status": status,
            "elapsed": elapsed,
            "error": error,
            "stage": stage,
            "inlined": inlined,
            "inline_failed": inline_failed,
        })

    def log_run_end(self, duration: float, status: str = "ok"):
        self._write({
            "event": "run_end",
            "counts": dict(self._counts),
            "duration": duration,
            "status": status,
        })

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self):
        if self._f is not None:
            try:
                self._f.flush()
                self._f.close()
            except Exception:
                pass
            self._f = None
