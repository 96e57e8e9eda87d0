"""
Structural checks for a parsed Bible against the canonical King James layout.

The parser never rejects content; this module is the downstream checker that
reports what looks wrong.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import numpy as np

from models import Bible, Book, Testament

KJV_CHAPTER_COUNTS = (
    ("Genesis", Testament.OLD, 50),
    ("Exodus", Testament.OLD, 40),
    ("Leviticus", Testament.OLD, 27),
    ("Numbers", Testament.OLD, 36),
    ("Deuteronomy", Testament.OLD, 34),
    ("Joshua", Testament.OLD, 24),
    ("Judges", Testament.OLD, 21),
    ("Ruth", Testament.OLD, 4),
    ("1 Samuel", Testament.OLD, 31),
    ("2 Samuel", Testament.OLD, 24),
    ("1 Kings", Testament.OLD, 22),
    ("2 Kings", Testament.OLD, 25),
    ("1 Chronicles", Testament.OLD, 29),
    ("2 Chronicles", Testament.OLD, 36),
    ("Ezra", Testament.OLD, 10),
    ("Nehemiah", Testament.OLD, 13),
    ("Esther", Testament.OLD, 10),
    ("Job", Testament.OLD, 42),
    ("Psalms", Testament.OLD, 150),
    ("Proverbs", Testament.OLD, 31),
    ("Ecclesiastes", Testament.OLD, 12),
    ("Song of Solomon", Testament.OLD, 8),
    ("Isaiah", Testament.OLD, 66),
    ("Jeremiah", Testament.OLD, 52),
    ("Lamentations", Testament.OLD, 5),
    ("Ezekiel", Testament.OLD, 48),
    ("Daniel", Testament.OLD, 12),
    ("Hosea", Testament.OLD, 14),
    ("Joel", Testament.OLD, 3),
    ("Amos", Testament.OLD, 9),
    ("Obadiah", Testament.OLD, 1),
    ("Jonah", Testament.OLD, 4),
    ("Micah", Testament.OLD, 7),
    ("Nahum", Testament.OLD, 3),
    ("Habakkuk", Testament.OLD, 3),
    ("Zephaniah", Testament.OLD, 3),
    ("Haggai", Testament.OLD, 2),
    ("Zechariah", Testament.OLD, 14),
    ("Malachi", Testament.OLD, 4),
    ("Matthew", Testament.NEW, 28),
    ("Mark", Testament.NEW, 16),
    ("Luke", Testament.NEW, 24),
    ("John", Testament.NEW, 21),
    ("Acts", Testament.NEW, 28),
    ("Romans", Testament.NEW, 16),
    ("1 Corinthians", Testament.NEW, 16),
    ("2 Corinthians", Testament.NEW, 13),
    ("Galatians", Testament.NEW, 6),
    ("Ephesians", Testament.NEW, 6),
    ("Philippians", Testament.NEW, 4),
    ("Colossians", Testament.NEW, 4),
    ("1 Thessalonians", Testament.NEW, 5),
    ("2 Thessalonians", Testament.NEW, 3),
    ("1 Timothy", Testament.NEW, 6),
    ("2 Timothy", Testament.NEW, 4),
    ("Titus", Testament.NEW, 3),
    ("Philemon", Testament.NEW, 1),
    ("Hebrews", Testament.NEW, 13),
    ("James", Testament.NEW, 5),
    ("1 Peter", Testament.NEW, 5),
    ("2 Peter", Testament.NEW, 3),
    ("1 John", Testament.NEW, 5),
    ("2 John", Testament.NEW, 1),
    ("3 John", Testament.NEW, 1),
    ("Jude", Testament.NEW, 1),
    ("Revelation", Testament.NEW, 22),
)


def canonical_book_names(testament: Optional[Testament] = None) -> List[str]:
    """
    List canonical book names in canonical order.

    Args:
        testament: Restrict to one testament (default: both)

    Returns:
        List of canonical names
    """
    return [
        name for name, book_testament, _ in KJV_CHAPTER_COUNTS
        if testament is None or book_testament is testament
    ]


def expected_chapter_counts(testament: Testament) -> Dict[str, int]:
    return {
        name: count for name, book_testament, count in KJV_CHAPTER_COUNTS
        if book_testament is testament
    }


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found by ``validate_bible``."""
    severity: Severity
    message: str
    book: Optional[str] = None

    def __str__(self) -> str:
        where = f"{self.book}: " if self.book else ""
        return f"[{self.severity.value}] {where}{self.message}"


def validate_bible(bible: Bible) -> List[ValidationIssue]:
    """
    Check a parsed Bible against the canonical King James structure.

    Args:
        bible: The parsed Bible

    Returns:
        List of issues found (empty when the structure is as expected)
    """
    issues = []

    for testament in Testament:
        books = bible.books(testament)
        expected = expected_chapter_counts(testament)

        if len(books) != len(expected):
            issues.append(ValidationIssue(
                Severity.ERROR,
                f"{testament.label} has {len(books)} books (expected {len(expected)})"
            ))

        names = Counter(book.name for book in books)
        for name, count in names.items():
            if count > 1:
                issues.append(ValidationIssue(Severity.ERROR, f"appears {count} times", name))

        for name in expected:
            if name not in names:
                issues.append(ValidationIssue(
                    Severity.ERROR, f"missing from the {testament.label}", name
                ))

        for book in books:
            if book.name not in expected:
                issues.append(ValidationIssue(
                    Severity.ERROR, f"unexpected book in the {testament.label}", book.name
                ))
            elif len(book.chapters) != expected[book.name]:
                issues.append(ValidationIssue(
                    Severity.ERROR,
                    f"has {len(book.chapters)} chapters (expected {expected[book.name]})",
                    book.name
                ))
            issues.extend(_check_book_structure(book))

        issues.extend(_check_contents(bible, testament))

    return issues


def _check_book_structure(book: Book) -> List[ValidationIssue]:
    issues = []
    if not book.chapters:
        issues.append(ValidationIssue(Severity.ERROR, "has no chapters", book.name))

    for chapter in book.chapters:
        if not chapter.verses:
            issues.append(ValidationIssue(
                Severity.ERROR, f"chapter {chapter.number} has no verses", book.name
            ))
        for verse in chapter.verses:
            if not verse.text.strip():
                issues.append(ValidationIssue(
                    Severity.ERROR, f"{chapter.number}:{verse.number} has empty text", book.name
                ))
    return issues


def _check_contents(bible: Bible, testament: Testament) -> List[ValidationIssue]:
    """Cross-check the table of contents against the parsed books."""
    contents = bible.contents(testament)
    if not contents:
        return [ValidationIssue(
            Severity.WARNING, f"no table of contents collected for the {testament.label}"
        )]

    issues = []
    parsed = [book.name for book in bible.books(testament)]
    for name in contents:
        if name not in parsed:
            issues.append(ValidationIssue(
                Severity.WARNING, "listed in the table of contents but not parsed", name
            ))
    for name in parsed:
        if name not in contents:
            issues.append(ValidationIssue(
                Severity.WARNING, "parsed but not listed in the table of contents", name
            ))
    return issues


def has_errors(issues: List[ValidationIssue]) -> bool:
    return any(issue.severity is Severity.ERROR for issue in issues)


def verse_length_stats(bible: Bible) -> Dict:
    """
    Summarize verse text lengths (in characters).

    Args:
        bible: The parsed Bible

    Returns:
        Dictionary with count, mean, median, and the shortest and longest verses
    """
    references = []
    lengths = []
    for book in bible.all_books():
        for chapter in book.chapters:
            for verse in chapter.verses:
                references.append(f"{book.name} {chapter.number}:{verse.number}")
                lengths.append(len(verse.text))

    if not lengths:
        return {"count": 0}

    lengths = np.array(lengths)
    shortest = int(np.argmin(lengths))
    longest = int(np.argmax(lengths))

    return {
        "count": int(lengths.size),
        "mean": float(lengths.mean()),
        "median": float(np.median(lengths)),
        "shortest": {"reference": references[shortest], "length": int(lengths[shortest])},
        "longest": {"reference": references[longest], "length": int(lengths[longest])},
    }
