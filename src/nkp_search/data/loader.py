import csv
import io
import os
import re
import time
import logging
import threading
from typing import Callable, Dict, List, Optional

import pandas as pd
import requests

from nkp_search.exceptions import DataCorrupt, DataUnavailable
from nkp_search.utils.performance import timed

logger = logging.getLogger(__name__)

Row = Dict[str, str]

DEFAULT_FETCH_TIMEOUT = 15.0

_WS_RUN = re.compile(r"\s+")


def normalize_header(name) -> str:
    """'Ijlas Name ' -> 'ijlas_name'."""
    return _WS_RUN.sub("_", str(name).strip().lower())


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_csv_text(source: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> str:
    """Read CSV text from a URL or a local path.

    Raises DataUnavailable on HTTP errors, connection problems, missing files
    and empty content.
    """
    if not source:
        raise DataUnavailable("No dataset source configured", reason="missing source")
    if is_remote(source):
        try:
            response = requests.get(source, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise DataUnavailable(f"Failed to fetch {source}: {e}", reason=str(e)) from e
        if response.status_code >= 400:
            raise DataUnavailable(
                f"Failed to fetch {source} (status {response.status_code})",
                reason=response.reason,
                status=response.status_code,
            )
        try:
            text = response.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DataCorrupt(f"{source} is not valid UTF-8: {e}", reason=str(e)) from e
    else:
        try:
            with open(source, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise DataCorrupt(f"{source} is not valid UTF-8: {e}", reason=str(e)) from e
        except OSError as e:
            raise DataUnavailable(f"Failed to read {source}: {e}", reason=e.strerror or str(e)) from e
    if not text or not text.strip():
        raise DataUnavailable(f"Dataset at {source} is empty", reason="empty content")
    return text


def check_quoting(text: str) -> None:
    """Raise DataCorrupt when a quoted field is never closed.

    The python parser would otherwise fold every following line into that
    field and silently lose the rest of the file.
    """
    reader = csv.reader(io.StringIO(text), strict=True)
    try:
        for _ in reader:
            pass
    except csv.Error as e:
        logger.error(f"CSV quoting broken near line {reader.line_num}: {e}")
        raise DataCorrupt(f"Malformed quoting near line {reader.line_num}: {e}", reason=str(e)) from e


def parse_csv_text(text: str) -> List[Row]:
    """Parse header-row CSV text into row dicts keyed by snake_case headers.

    Lines with more fields than the header are logged and skipped. Rows whose
    values are all blank are dropped. A file without a usable header or with an
    unterminated quote raises DataCorrupt; a header with no data rows yields [].
    """
    check_quoting(text)
    skipped: List[List[str]] = []

    def _bad_line(fields: List[str]):
        skipped.append(fields)
        return None

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_bad_line,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError, ValueError) as e:
        raise DataCorrupt(f"Unparseable CSV: {e}", reason=str(e)) from e

    if skipped:
        logger.warning(f"Skipped {len(skipped)} malformed CSV line(s); first: {skipped[0][:5]}")

    named = [c for c in df.columns if str(c).strip() and not str(c).startswith("Unnamed:")]
    if not named:
        raise DataCorrupt("CSV has no discoverable header row", reason="no header")

    df.columns = [normalize_header(c) for c in df.columns]
    df = df.fillna("")
    if df.empty:
        logger.warning("CSV parsed with headers but no data rows")
        return []
    keep = df.astype(str).apply(lambda col: col.str.strip() != "").any(axis=1)
    df = df[keep]
    if df.empty:
        logger.warning("CSV parsed with headers but every data row was blank")
    return df.to_dict(orient="records")


def load_rows(source: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> List[Row]:
    with timed(f"Loading dataset from {source}", logger, logging.INFO):
        text = fetch_csv_text(source, timeout=timeout)
        rows = parse_csv_text(text)
    logger.info(f"Parsed {len(rows)} valid data rows")
    return rows


class CachedLoader:
    """Loads the dataset and keeps the parsed rows for ``ttl_seconds``.

    A ttl of 0 disables caching, so every call re-fetches and re-parses.
    """

    def __init__(self, source: str, ttl_seconds: float = 0.0, timeout: float = DEFAULT_FETCH_TIMEOUT,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self._clock = clock
        self._rows: Optional[List[Row]] = None
        self._loaded_at: Optional[float] = None
        self._lock = threading.Lock()

    def __call__(self) -> List[Row]:
        return self.load()

    def load(self) -> List[Row]:
        if self.ttl_seconds <= 0:
            return load_rows(self.source, timeout=self.timeout)
        with self._lock:
            now = self._clock()
            fresh = self._loaded_at is not None and (now - self._loaded_at) < self.ttl_seconds
            if self._rows is None or not fresh:
                self._rows = load_rows(self.source, timeout=self.timeout)
                self._loaded_at = now
            return self._rows

    def invalidate(self) -> None:
        with self._lock:
            self._rows = None
            self._loaded_at = None

    @property
    def cached_rows(self) -> int:
        return len(self._rows) if self._rows is not None else 0

    def describe(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "remote": is_remote(self.source),
            "exists": True if is_remote(self.source) else os.path.exists(self.source),
            "ttl_seconds": self.ttl_seconds,
            "cached_rows": self.cached_rows,
        }
