from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, List


RECORD_COLUMNS = ["name", "date", "meal_type", "timestamp"]

_LINE_SPLIT = re.compile(r"[\r\n]+")
_TOKEN_SPLIT = re.compile(r"\s+")


@dataclass(frozen=True)
class Record:
    """One attendance entry: `<name> <date> <meal_type> <timestamp>`."""

    name: str = ""
    date: str = ""
    meal_type: str = ""
    timestamp: str = ""

    @property
    def month(self) -> str:
        return self.date[:7]

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def parse_line(line: str) -> Record:
    tokens = _TOKEN_SPLIT.split(line)[: len(RECORD_COLUMNS)]
    tokens += [""] * (len(RECORD_COLUMNS) - len(tokens))
    return Record(*tokens)


def parse_records(text: str, *, skip_blank: bool = False) -> List[Record]:
    """Parse a raw log into records, one per line.

    Every piece produced by splitting on newline runs becomes a record, so an empty
    input or a trailing newline yields an all-empty record. `skip_blank=True` drops
    lines that hold only whitespace instead.
    """
    lines = _LINE_SPLIT.split(text or "")
    if skip_blank:
        lines = [line for line in lines if line.strip()]
    return [parse_line(line) for line in lines]

