from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from core.dimensions import date_bounds, distinct_months, distinct_people
from core.filters import FilterState, filter_records, normalize_filters
from core.records import Record, parse_records
from core.stats import compute_stats


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
LOG_GLOB = "*.txt"
FALLBACK_ENCODING = "gb18030"


def get_source_files(data_dir: Optional[Path] = None) -> List[Path]:
    return sorted((data_dir or DATA_DIR).glob(LOG_GLOB))


def file_signature(files: List[Path]) -> Tuple[Tuple[str, float], ...]:
    return tuple((str(f), f.stat().st_mtime) for f in files)


def decode_log_bytes(data: bytes) -> str:
    """Decode an uploaded log; UTF-8 (with or without BOM) first, then GB18030."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("log is not valid UTF-8, decoding as %s", FALLBACK_ENCODING)
        return data.decode(FALLBACK_ENCODING, errors="replace")


def load_log_text(path: Path | str) -> str:
    return decode_log_bytes(Path(path).read_bytes())


@lru_cache(maxsize=4)
def _load_log_data_cached(files_sig: Tuple[Tuple[str, float], ...], skip_blank: bool) -> Dict[str, object]:
    # Files are concatenated in name order; each keeps its own line breaks.
    texts = [load_log_text(name) for name, _ in files_sig]
    text = "\n".join(texts)
    records = parse_records(text, skip_blank=skip_blank)
    logger.debug("parsed %d records from %d file(s)", len(records), len(texts))
    return {"files": [name for name, _ in files_sig], "text": text, "records": records}


def load_log_data(data_dir: Optional[Path] = None, *, skip_blank: bool = False) -> Dict[str, object]:
    files = get_source_files(data_dir)
    if not files:
        return {"files": [], "text": "", "records": []}
    return _load_log_data_cached(file_signature(files), skip_blank)


def build_data_context(text: str, *, skip_blank: bool = False) -> Dict[str, object]:
    records = parse_records(text, skip_blank=skip_blank)
    logger.debug("parsed %d records", len(records))
    return {"files": [], "text": text, "records": records}


def prepare_context(filters: dict | FilterState, data_ctx: Dict[str, object]) -> Dict[str, object]:
    records: List[Record] = list(data_ctx.get("records", []) or [])
    filt = filters if isinstance(filters, FilterState) else normalize_filters(filters)

    filtered = filter_records(records, filt)
    logger.debug("filter %s kept %d of %d records", filt, len(filtered), len(records))

    return {
        "filters": filt,
        "records": records,
        "filtered_records": filtered,
        "people": distinct_people(records),
        "months": distinct_months(records),
        "date_bounds": date_bounds(records),
        "stats": compute_stats(filtered),
    }
