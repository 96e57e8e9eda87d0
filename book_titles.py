"""
Book title recognition for the Project Gutenberg King James text.

Each book in this edition is announced by a header line spelling out its
full traditional title ("The First Book of Moses: Called Genesis", "The
General Epistle of Jude", ...). A few minor prophets, Ezra and Ecclesiastes
are announced by their bare name instead.

The table below is evaluated top to bottom and the first matching rule wins,
so a more general prefix is always listed after the more specific titles it
could swallow.
"""

from enum import Enum
from typing import NamedTuple, Optional, Tuple

from models import Testament

ALTERNATE_TITLE_MARKER = "Otherwise Called"


class MatchKind(Enum):
    EXACT = "exact"
    PREFIX = "prefix"


class TitleRule(NamedTuple):
    """One entry of the title table."""
    pattern: str
    name: str
    testament: Testament
    match: MatchKind

    def matches(self, line: str) -> bool:
        if self.match is MatchKind.EXACT:
            return line == self.pattern
        return line.startswith(self.pattern)


def _exact(pattern: str, name: str, testament: Testament = Testament.OLD) -> TitleRule:
    return TitleRule(pattern, name, testament, MatchKind.EXACT)


def _prefix(pattern: str, name: str, testament: Testament = Testament.OLD) -> TitleRule:
    return TitleRule(pattern, name, testament, MatchKind.PREFIX)


# Samuel headers would otherwise be shadowed by the numbered-book prefixes.
SAMUEL_RULES = (
    _exact("The First Book of Samuel", "1 Samuel"),
    _exact("The Second Book of Samuel", "2 Samuel"),
)

BARE_NAME_RULES = tuple(
    _exact(name, name) for name in (
        "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah", "Nahum",
        "Habakkuk", "Zephaniah", "Haggai", "Zechariah", "Malachi",
        "Ezra", "Ecclesiastes",
    )
)

OLD_TESTAMENT_RULES = (
    _prefix("The First Book of Moses:", "Genesis"),
    _prefix("The Second Book of Moses:", "Exodus"),
    _prefix("The Third Book of Moses:", "Leviticus"),
    _prefix("The Fourth Book of Moses:", "Numbers"),
    _prefix("The Fifth Book of Moses:", "Deuteronomy"),
    _prefix("The Book of Joshua", "Joshua"),
    _prefix("The Book of Judges", "Judges"),
    _prefix("The Book of Ruth", "Ruth"),
    _prefix("The First Book of the Chronicles", "1 Chronicles"),
    _prefix("The Second Book of the Chronicles", "2 Chronicles"),
    _prefix("The Book of Nehemiah", "Nehemiah"),
    _prefix("The Book of Esther", "Esther"),
    _prefix("The Book of Job", "Job"),
    _prefix("The Book of Psalms", "Psalms"),
    _prefix("The Proverbs", "Proverbs"),
    _prefix("The Song of Solomon", "Song of Solomon"),
    _prefix("The Book of the Prophet Isaiah", "Isaiah"),
    _prefix("The Book of the Prophet Jeremiah", "Jeremiah"),
    _prefix("The Lamentations of Jeremiah", "Lamentations"),
    _prefix("The Book of the Prophet Ezekiel", "Ezekiel"),
    _prefix("The Book of Daniel", "Daniel"),
)

# Checked after every other Old Testament rule: "Book of the Kings" wording
# turns up inside other headers in some printings.
KINGS_RULES = (
    _prefix("The First Book of the Kings", "1 Kings"),
    _prefix("The Second Book of the Kings", "2 Kings"),
)

NEW_TESTAMENT_RULES = tuple(
    _prefix(pattern, name, Testament.NEW) for pattern, name in (
        ("The Gospel According to Saint Matthew", "Matthew"),
        ("The Gospel According to Saint Mark", "Mark"),
        ("The Gospel According to Saint Luke", "Luke"),
        ("The Gospel According to Saint John", "John"),
        ("The Acts of the Apostles", "Acts"),
        ("The Epistle of Paul the Apostle to the Romans", "Romans"),
        ("The First Epistle of Paul the Apostle to the Corinthians", "1 Corinthians"),
        ("The Second Epistle of Paul the Apostle to the Corinthians", "2 Corinthians"),
        ("The Epistle of Paul the Apostle to the Galatians", "Galatians"),
        ("The Epistle of Paul the Apostle to the Ephesians", "Ephesians"),
        ("The Epistle of Paul the Apostle to the Philippians", "Philippians"),
        ("The Epistle of Paul the Apostle to the Colossians", "Colossians"),
        ("The First Epistle of Paul the Apostle to the Thessalonians", "1 Thessalonians"),
        ("The Second Epistle of Paul the Apostle to the Thessalonians", "2 Thessalonians"),
        ("The First Epistle of Paul the Apostle to Timothy", "1 Timothy"),
        ("The Second Epistle of Paul the Apostle to Timothy", "2 Timothy"),
        ("The Epistle of Paul the Apostle to Titus", "Titus"),
        ("The Epistle of Paul the Apostle to Philemon", "Philemon"),
        ("The Epistle of Paul the Apostle to the Hebrews", "Hebrews"),
        ("The General Epistle of James", "James"),
        ("The First Epistle General of Peter", "1 Peter"),
        ("The Second General Epistle of Peter", "2 Peter"),
        ("The First Epistle General of John", "1 John"),
        ("The Second Epistle General of John", "2 John"),
        ("The Third Epistle General of John", "3 John"),
        ("The General Epistle of Jude", "Jude"),
        ("The Revelation of Saint John the Divine", "Revelation"),
    )
)

TITLE_RULES: Tuple[TitleRule, ...] = (
    SAMUEL_RULES
    + BARE_NAME_RULES
    + OLD_TESTAMENT_RULES
    + KINGS_RULES
    + NEW_TESTAMENT_RULES
)

KINGS_BOOKS = frozenset(rule.name for rule in KINGS_RULES)


def classify_line(line: str) -> Optional[Tuple[str, Testament]]:
    """
    Decide whether a line is a book title header.

    Args:
        line: A single line of text (surrounding whitespace is ignored)

    Returns:
        Tuple of (canonical book name, testament) or None if the line is not a header
    """
    line = line.strip()

    if not line or ALTERNATE_TITLE_MARKER in line:
        return None

    for rule in TITLE_RULES:
        if rule.matches(line):
            return rule.name, rule.testament

    return None
