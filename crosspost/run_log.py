from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, TextIO

_MESSAGE_LIMIT = 2000
_TRACEBACK_LIMIT = 12000


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def _describe_exception(exc: BaseException) -> dict[str, str]:
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {
        "type": type(exc).__name__,
        "message": _clip(str(exc), _MESSAGE_LIMIT),
        "traceback": _clip(tb, _TRACEBACK_LIMIT),
    }


class RunLogger:
    """
    JSONL event log for one comparison run.

    Each line is one JSON object: ts, level, event, session_id, and when set the
    listing ("top"/"new"), a url, and a data mapping. Fetch batches, skipped
    items and command failures are recorded this way so a run can be audited.
    Writes to a file path, or to a caller-owned stream that is never closed here.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        stream: TextIO | None = None,
        overwrite: bool = True,
        listing: str | None = None,
    ) -> None:
        if path is None and stream is None:
            raise ValueError("RunLogger needs a path or a stream")
        self._path = Path(path) if path is not None else None
        self._stream = stream
        self._mode = "w" if overwrite else "a"
        self._listing = (listing or "").strip() or None
        self._session = uuid.uuid4().hex
        self._fp: TextIO | None = None
        self._lock = Lock()

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        overwrite: bool = True,
        listing: str | None = None,
    ) -> "RunLogger":
        """Create a file-backed logger, raising OSError right away if the path is unusable."""
        logger = cls(path, overwrite=overwrite, listing=listing)
        logger._attach()
        return logger

    def __enter__(self) -> "RunLogger":
        self._attach()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            fp, self._fp = self._fp, None
        if fp is None:
            return
        fp.flush()
        if self._path is not None:
            fp.close()

    def set_listing(self, listing: str) -> None:
        self._listing = (listing or "").strip() or self._listing

    def debug(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self.log("DEBUG", event, url=url, **data)

    def info(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self.log("INFO", event, url=url, **data)

    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self.log("WARN", event, url=url, **data)

    def exception(
        self,
        event: str,
        *,
        exc: BaseException,
        url: str | None = None,
        **data: Any,
    ) -> None:
        self.log("ERROR", event, url=url, error=_describe_exception(exc), **data)

    def log(self, level: str, event: str, *, url: str | None = None, **data: Any) -> None:
        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "event": event,
            "session_id": self._session,
        }
        if self._listing:
            record["listing"] = self._listing
        if url:
            record["url"] = url
        if data:
            record["data"] = data

        line = json.dumps(record, ensure_ascii=False, sort_keys=True, default=str)
        self._attach()
        with self._lock:
            if self._fp is not None:
                self._fp.write(line + "\n")
                self._fp.flush()

    def _attach(self) -> None:
        with self._lock:
            if self._fp is not None:
                return
            if self._path is None:
                self._fp = self._stream
                return
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._fp = self._path.open(self._mode, encoding="utf-8", newline="\n")
            # A reopen after close() continues the same file.
            self._mode = "a"
