from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from core.dimensions import ALL
from core.records import Record


# Column labels for date, name and meal type in the display locale.
EXPORT_HEADER: List[str] = ["日期", "姓名", "类型"]
EXPORT_PREFIX = "用餐记录"
ALL_LABEL = "全部"
EXPORT_DELIMITER = ","
EXPORT_LINE_SEPARATOR = "\n"


def build_export_table(records: Iterable[Record]) -> pd.DataFrame:
    rows = [(r.date, r.name, r.meal_type) for r in records]
    return pd.DataFrame(rows, columns=EXPORT_HEADER, dtype=object)


def export_csv(records: Iterable[Record]) -> str:
    """Header plus one row per record, fields and rows joined as-is (no quoting, no trailing separator)."""
    table = build_export_table(records)
    rows = [EXPORT_HEADER] + [list(row) for row in table.itertuples(index=False, name=None)]
    return EXPORT_LINE_SEPARATOR.join(EXPORT_DELIMITER.join(row) for row in rows)


def export_bytes(records: Iterable[Record]) -> bytes:
    """Export text encoded as UTF-8 with a BOM so spreadsheet tools pick up the encoding."""
    return export_csv(records).encode("utf-8-sig")


def export_filename(person: str, month: str) -> str:
    def label(value: str) -> str:
        return ALL_LABEL if value == ALL else value

    return f"{EXPORT_PREFIX}_{label(person)}_{label(month)}.csv"
