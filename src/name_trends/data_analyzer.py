#!/usr/bin/env python

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import jellyfish
import Levenshtein
import pandas as pd

# --- Configuration ---
DATA_FILE = Path(os.environ.get("NAME_TRENDS_DATA", "names-data.txt"))
START = 1900
DECADES = 11
TOP_DECADE_NAMES = 5

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """A line of the data file is not `<name> <rank> x DECADES`."""

    def __init__(self, message: str, line: str = "", line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class NotFoundError(LookupError):
    """A name or decade year is not in the catalog."""


def decade_year(index: int) -> int:
    return START + 10 * index


def decade_index(year: int) -> int:
    """Maps a decade year (1900, 1910, ...) to its rank index."""
    if year < START or (year - START) % 10 or (year - START) // 10 >= DECADES:
        raise NotFoundError(f"No data for decade {year}")
    return (year - START) // 10


@dataclass(frozen=True)
class RankSeries:
    """One name and its rank in each decade. A rank of 0 means unranked."""
    name: str
    ranks: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "ranks", tuple(self.ranks))
        if len(self.ranks) != DECADES:
            raise ParseError(f"expected {DECADES} ranks for '{self.name}', got {len(self.ranks)}")
        negative = [rank for rank in self.ranks if rank < 0]
        if negative:
            raise ParseError(f"rank {negative[0]} for '{self.name}' is negative")

    def rank_at(self, index: int) -> int:
        if not 0 <= index < DECADES:
            raise IndexError(f"decade index {index} out of range [0, {DECADES})")
        return self.ranks[index]

    def best_year(self) -> int:
        """
        Year of the lowest positive rank, earliest decade on ties.

        Falls back to START when the name is unranked in every decade. That
        default is kept for compatibility with existing data consumers but
        does not mean the name peaked in START.
        """
        best, best_year = None, START
        for index, rank in enumerate(self.ranks):
            if rank > 0 and (best is None or rank < best):
                best, best_year = rank, decade_year(index)
        return best_year

    def to_line(self) -> str:
        return " ".join([self.name, *(str(rank) for rank in self.ranks)])


def parse_line(line: str, line_number: Optional[int] = None) -> RankSeries:
    tokens = line.split()
    if len(tokens) < DECADES + 1:
        raise ParseError(f"expected a name and {DECADES} ranks, got {len(tokens)} fields", line, line_number)

    ranks = []
    for token in tokens[1:DECADES + 1]:
        # int() alone would also take digit separators such as "1_0"
        if not re.fullmatch(r"[+-]?\d+", token):
            raise ParseError(f"rank '{token}' is not an integer", line, line_number)
        ranks.append(int(token))
    try:
        return RankSeries(tokens[0], tuple(ranks))
    except ParseError as e:
        raise ParseError(str(e), line, line_number) from None


class Catalog:
    """Ordered, read-only collection of RankSeries with the lookups the app needs."""
    def __init__(self, records: List[RankSeries]):
        self.records: Tuple[RankSeries, ...] = tuple(records)
        self.ranks_df = pd.DataFrame(
            [record.ranks for record in self.records],
            columns=[decade_year(i) for i in range(DECADES)],
            dtype="int64",
        )
        self.ranks_df.insert(0, "Name", [record.name for record in self.records])
        self.phonetic = [jellyfish.metaphone(record.name) for record in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RankSeries]:
        return iter(self.records)

    @staticmethod
    def decade_years() -> List[str]:
        return [str(decade_year(i)) for i in range(DECADES)]

    def find_by_name(self, name: str) -> Optional[RankSeries]:
        target = name.lower()
        for record in self.records:
            if record.name.lower() == target:
                return record
        return None

    def get(self, name: str) -> RankSeries:
        record = self.find_by_name(name)
        if record is None:
            raise NotFoundError(f"Name '{name}' not found")
        return record

    def search(self, substring: str) -> Iterator[RankSeries]:
        target = substring.lower()
        return (record for record in self.records if target in record.name.lower())

    def top_n(self, decade: Union[int, str], n: int = TOP_DECADE_NAMES) -> List[RankSeries]:
        """Most popular names of a decade year, ties kept in catalog order."""
        try:
            year = int(decade)
        except ValueError:
            raise NotFoundError(f"No data for decade {decade!r}") from None
        decade_index(year)
        if n <= 0:
            return []
        column = self.ranks_df[year]
        ranked = column[column != 0].sort_values(kind="stable").head(n)
        return [self.records[i] for i in ranked.index]

    def suggest(self, name: str, limit: int = 5, max_distance: int = 2) -> List[str]:
        """Names spelled or sounding like `name`, closest spelling first."""
        target = name.lower()
        if not target or limit <= 0:
            return []

        by_spelling = []
        for position, record in enumerate(self.records):
            distance = Levenshtein.distance(target, record.name.lower())
            if 0 < distance <= max_distance:
                by_spelling.append((distance, position, record.name))
        by_spelling.sort()

        target_metaphone = jellyfish.metaphone(name)
        by_sound = []
        if target_metaphone:
            by_sound = [
                record.name for record, code in zip(self.records, self.phonetic)
                if code == target_metaphone and record.name.lower() != target
            ]

        suggestions: List[str] = []
        for candidate in [entry[2] for entry in by_spelling] + by_sound:
            if candidate not in suggestions:
                suggestions.append(candidate)
        return suggestions[:limit]


def load_catalog(path: Path = DATA_FILE) -> Catalog:
    """
    Reads every record of the data file. A single bad line aborts the load;
    there is no partial catalog.
    """
    text = Path(path).read_text(encoding="utf-8")
    records = [
        parse_line(line, line_number)
        for line_number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    logger.info("Loaded %d names from %s", len(records), path)
    return Catalog(records)
