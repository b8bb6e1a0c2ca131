"""Round history: one fixed-width line per finished round in a plain text file."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .config import DATA_FILE
from .logger import get_logger

log = get_logger("stats")

# column widths: date, score, high score, level
WIDTHS = (12, 10, 14, 8)
HEADER = ("Date", "Score", "High Score", "Level")


def format_row(values) -> str:
    return "".join(str(v).ljust(w) for v, w in zip(values, WIDTHS))


@dataclass(frozen=True)
class SessionRecord:
    date: str
    score: int
    high_score: int
    level: int

    @classmethod
    def today(cls, score: int, high_score: int, level: int) -> SessionRecord:
        return cls(date.today().isoformat(), score, high_score, level)

    @classmethod
    def from_line(cls, line: str) -> SessionRecord:
        parts = line.split()
        if len(parts) != 4:
            raise ValueError(f"expected 4 fields, got {len(parts)}: {line!r}")
        day, score, high_score, level = parts
        return cls(day, int(score), int(high_score), int(level))

    def to_line(self) -> str:
        return format_row((self.date, self.score, self.high_score, self.level)) + "\n"


@dataclass
class StatsSummary:
    lines: list[str] = field(default_factory=list)
    records: list[SessionRecord] = field(default_factory=list)
    total_games: int = 0
    best_ever: int = 0

    @property
    def empty(self) -> bool:
        return self.total_games == 0


class StatsLog:
    def __init__(self, path: Path | str = DATA_FILE):
        self.path = Path(path)

    def append(self, record: SessionRecord) -> bool:
        """Append one line. Returns False instead of raising when the file can't be written."""
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(record.to_line())
        except OSError as e:
            log.warning("could not save round to %s: %s", self.path, e)
            return False
        return True

    def read(self) -> StatsSummary | None:
        """Read every record back. None means there is no readable log."""
        try:
            # undecodable bytes become U+FFFD and the line is skipped as malformed
            with self.path.open("r", encoding="utf-8", errors="replace") as f:
                raw = f.read().splitlines()
        except FileNotFoundError:
            return None
        except OSError as e:
            log.warning("could not read %s: %s", self.path, e)
            return None

        summary = StatsSummary()
        for line in raw:
            if not line.strip() or line.startswith("#"):
                continue
            summary.lines.append(line.rstrip())
            summary.total_games += 1
            try:
                record = SessionRecord.from_line(line)
            except ValueError as e:
                log.warning("skipping malformed stats line: %s", e)
                continue
            summary.records.append(record)
            summary.best_ever = max(summary.best_ever, record.high_score)
        return summary
