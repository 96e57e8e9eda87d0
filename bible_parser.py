"""
Bible parser for the Project Gutenberg King James text (pg10.txt).

Walks the text once, line by line, recognizing book title headers and inline
"chapter:verse" references, and assembles a Book -> Chapter -> Verse tree.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Tuple

from tqdm import tqdm

from book_titles import KINGS_BOOKS, classify_line
from models import Bible, Book, Chapter, Testament, Verse

logger = logging.getLogger(__name__)

START_MARKER = "*** START OF THE PROJECT GUTENBERG"
END_MARKER = "*** END OF THE PROJECT GUTENBERG"
OLD_TESTAMENT_MARKER = "The Old Testament"
NEW_TESTAMENT_MARKER = "The New Testament"

EXPECTED_OT_BOOKS = 39
EXPECTED_NT_BOOKS = 27

# A whole whitespace token such as "3:16". Anything with punctuation attached
# ("3:16,") is ordinary text.
VERSE_REFERENCE = re.compile(r'^([0-9]+):([0-9]+)$')


class EventKind(Enum):
    """Kinds of diagnostic events emitted while assembling."""
    BOOK_ACCEPTED = "book_accepted"
    BOOK_REOPENED = "book_reopened"
    BOOK_SUPPRESSED = "book_suppressed"
    BOOK_DISCARDED = "book_discarded"
    CHAPTER_OPENED = "chapter_opened"
    CHAPTER_DISCARDED = "chapter_discarded"
    VERSE_OPENED = "verse_opened"
    VERSE_DISCARDED = "verse_discarded"
    LINE_DROPPED = "line_dropped"


@dataclass(frozen=True)
class ParseEvent:
    """A single diagnostic event."""
    kind: EventKind
    line_number: Optional[int] = None
    book: Optional[str] = None
    chapter: Optional[str] = None
    verse: Optional[str] = None
    detail: str = ""

    def __str__(self) -> str:
        location = " ".join(part for part in (self.book, self.chapter) if part)
        if self.verse:
            location = f"{location}:{self.verse}"
        line = f"line {self.line_number}: " if self.line_number is not None else ""
        text = f"{line}{self.kind.value}"
        if location:
            text += f" [{location}]"
        if self.detail:
            text += f" {self.detail}"
        return text


EventHandler = Callable[[ParseEvent], None]

# Book-level events are worth seeing at INFO; everything else is DEBUG noise.
_INFO_EVENTS = {
    EventKind.BOOK_ACCEPTED,
    EventKind.BOOK_REOPENED,
    EventKind.BOOK_SUPPRESSED,
    EventKind.BOOK_DISCARDED,
}


def parse_verse_reference(token: str) -> Optional[Tuple[str, str]]:
    """
    Parse a "chapter:verse" token.

    Args:
        token: A single whitespace-delimited token

    Returns:
        Tuple of (chapter, verse) strings as written, or None
    """
    match = VERSE_REFERENCE.match(token)
    if not match:
        return None
    return match.group(1), match.group(2)


class DocumentAssembler:
    """
    State machine that turns body lines into a Bible.

    Feed it trimmed lines in file order with ``feed`` and call ``finish``
    once at the end of input. Every cross-line decision (the Kings/Samuel
    collisions, continuation text) lives here; title recognition itself is
    delegated to ``classify_line``.
    """

    def __init__(self, on_event: Optional[EventHandler] = None):
        """
        Initialize the assembler.

        Args:
            on_event: Optional callback receiving every ParseEvent
        """
        self.on_event = on_event
        self.bible = Bible()
        self.current_book: Optional[Book] = None
        self.current_testament: Testament = Testament.OLD
        self.current_chapter: Optional[Chapter] = None
        self.current_verse: Optional[Verse] = None
        self.seen_books: Set[str] = set()
        self.previous_line_was_header = False
        self.line_number: Optional[int] = None
        self._finished = False

    def _emit(self, kind: EventKind, detail: str = "", **location) -> None:
        event = ParseEvent(kind, self.line_number, detail=detail, **location)
        level = logging.INFO if kind in _INFO_EVENTS else logging.DEBUG
        logger.log(level, "%s", event)
        if self.on_event is not None:
            self.on_event(event)

    def feed(self, line: str, line_number: Optional[int] = None) -> None:
        """
        Process one line of body text.

        Args:
            line: The raw line (surrounding whitespace is ignored)
            line_number: Optional 1-based source line number for diagnostics
        """
        if self._finished:
            raise RuntimeError("Cannot feed lines after finish()")

        self.line_number = line_number
        line = line.strip()
        if not line:
            return

        candidate = classify_line(line)
        if candidate is not None:
            self._handle_header(candidate[0], candidate[1], line)
            return

        self.previous_line_was_header = False
        self._handle_body(line)

    def feed_lines(self, lines: Iterable[str], first_line_number: int = 1) -> None:
        """Feed several lines, numbering them from ``first_line_number``."""
        for offset, line in enumerate(lines):
            self.feed(line, first_line_number + offset)

    def finish(self) -> Bible:
        """
        Flush the open verse, chapter and book, and return the Bible.

        Returns:
            The assembled Bible
        """
        if not self._finished:
            self._seal_book()
            self._finished = True
            logger.info(
                "Final book counts - OT: %d, NT: %d",
                len(self.bible.ot), len(self.bible.nt)
            )
        return self.bible

    def _handle_header(self, name: str, testament: Testament, line: str) -> None:
        # Rule A: a stray Kings sub-heading directly under another header
        if self.previous_line_was_header and name in KINGS_BOOKS:
            self._emit(
                EventKind.BOOK_SUPPRESSED,
                f"'{name}' directly follows another header",
                book=self.current_book.name if self.current_book else None
            )
            return

        # Rule B: a forward reference to Kings printed before Samuel's text starts
        if (name in KINGS_BOOKS
                and self.current_book is not None
                and "Samuel" in self.current_book.name
                and self.current_verse is None):
            self._emit(
                EventKind.BOOK_SUPPRESSED,
                f"'{name}' before any verse of {self.current_book.name}",
                book=self.current_book.name
            )
            return

        self.previous_line_was_header = True

        if (self.current_book is not None
                and self.current_book.name == name
                and self.current_verse is None
                and not self.current_book.chapters):
            self._emit(EventKind.BOOK_REOPENED, f"from line '{line}'", book=name)
            return

        if name in self.seen_books:
            detail = f"re-encountered from line '{line}'"
        else:
            detail = f"from line '{line}'"
            self.seen_books.add(name)

        self._seal_book()
        self.current_book = Book(name=name)
        self.current_testament = testament
        self._emit(EventKind.BOOK_ACCEPTED, detail, book=name)

    def _handle_body(self, line: str) -> None:
        if self.current_book is None:
            self._emit(EventKind.LINE_DROPPED, "no book open")
            return

        words = line.split()
        for index, word in enumerate(words):
            reference = parse_verse_reference(word)
            if reference is None:
                continue

            chapter_number, verse_number = reference
            if self.current_verse is not None and index > 0:
                self._append_text(words[:index])
            self._seal_verse()

            if self.current_chapter is None or self.current_chapter.number != chapter_number:
                self._seal_chapter()
                self.current_chapter = Chapter(number=chapter_number)
                self._emit(
                    EventKind.CHAPTER_OPENED,
                    book=self.current_book.name, chapter=chapter_number
                )

            self.current_verse = Verse(number=verse_number, text=" ".join(words[index + 1:]))
            self._emit(
                EventKind.VERSE_OPENED,
                book=self.current_book.name, chapter=chapter_number, verse=verse_number
            )
            return

        if self.current_verse is not None:
            self._append_text(words)
        else:
            self._emit(EventKind.LINE_DROPPED, "no verse open", book=self.current_book.name)

    def _append_text(self, words: List[str]) -> None:
        addition = " ".join(words)
        if self.current_verse.text:
            self.current_verse.text = f"{self.current_verse.text} {addition}"
        else:
            self.current_verse.text = addition

    def _seal_verse(self) -> None:
        verse, self.current_verse = self.current_verse, None
        if verse is None:
            return
        if not verse.text:
            self._emit(
                EventKind.VERSE_DISCARDED, "empty text",
                book=self.current_book.name if self.current_book else None,
                chapter=self.current_chapter.number,
                verse=verse.number
            )
            return
        self.current_chapter.verses.append(verse)

    def _seal_chapter(self) -> None:
        self._seal_verse()
        chapter, self.current_chapter = self.current_chapter, None
        if chapter is None or self.current_book is None:
            return
        if not chapter.verses:
            self._emit(
                EventKind.CHAPTER_DISCARDED, "no verses",
                book=self.current_book.name, chapter=chapter.number
            )
            return
        self.current_book.chapters.append(chapter)

    def _seal_book(self) -> None:
        self._seal_chapter()
        book, self.current_book = self.current_book, None
        if book is None:
            return
        if not book.chapters:
            self._emit(EventKind.BOOK_DISCARDED, "no chapters", book=book.name)
            return
        self.bible.books(self.current_testament).append(book)


class GutenbergReader:
    """
    Splits a Gutenberg file into its regions and drives the assembler.

    Everything up to and including the start marker is boilerplate. The
    table of contents that follows is collected into ``ot_contents`` and
    ``nt_contents``; the body starts at the "The Old Testament" line that
    follows it and runs until the end marker.
    """

    def __init__(self, on_event: Optional[EventHandler] = None):
        self.assembler = DocumentAssembler(on_event=on_event)
        self.in_bible = False
        self.in_toc = False
        self.toc_is_ot = True
        self.toc_complete = False
        self.in_content = False
        self.ended = False

    @property
    def bible(self) -> Bible:
        return self.assembler.bible

    def feed(self, line: str, line_number: Optional[int] = None) -> None:
        """
        Route one raw line to the right region handler.

        Args:
            line: Raw line of the file
            line_number: Optional 1-based line number
        """
        line = line.strip()
        if not line or self.ended:
            return

        if not self.in_bible:
            if START_MARKER in line:
                self.in_bible = True
            return

        if END_MARKER in line:
            self.ended = True
            logger.info("End marker reached at line %s", line_number)
            return

        if self.in_content:
            if line.startswith((OLD_TESTAMENT_MARKER, NEW_TESTAMENT_MARKER)):
                logger.debug("Skipping testament heading at line %s: %s", line_number, line)
                return
            self.assembler.feed(line, line_number)
            return

        if not self.in_toc and not self.toc_complete:
            if OLD_TESTAMENT_MARKER in line:
                self.in_toc = True
                self.toc_is_ot = True
            return

        if self.in_toc:
            self._feed_toc(line)
            return

        if OLD_TESTAMENT_MARKER in line:
            self._start_content()

    def _feed_toc(self, line: str) -> None:
        if NEW_TESTAMENT_MARKER in line:
            self.toc_is_ot = False
            return

        if OLD_TESTAMENT_MARKER in line and not self.toc_is_ot:
            logger.warning(
                "Table of contents incomplete: %d OT and %d NT entries",
                len(self.bible.ot_contents), len(self.bible.nt_contents)
            )
            self._start_content()
            return

        candidate = classify_line(line)
        if candidate is None:
            return

        contents = self.bible.ot_contents if self.toc_is_ot else self.bible.nt_contents
        contents.append(candidate[0])

        if (len(self.bible.ot_contents) == EXPECTED_OT_BOOKS
                and len(self.bible.nt_contents) == EXPECTED_NT_BOOKS):
            self.in_toc = False
            self.toc_complete = True
            logger.info(
                "TOC complete: %d OT and %d NT entries",
                len(self.bible.ot_contents), len(self.bible.nt_contents)
            )

    def _start_content(self) -> None:
        self.in_toc = False
        self.toc_complete = True
        self.in_content = True
        logger.info("Content section starts")

    def finish(self) -> Bible:
        if not self.in_bible:
            logger.warning("Start marker '%s' not found; nothing parsed", START_MARKER)
        return self.assembler.finish()


def parse_gutenberg(text: str, on_event: Optional[EventHandler] = None, show_progress: bool = False) -> Bible:
    """
    Parse the full text of a Gutenberg King James Bible.

    Args:
        text: Complete file contents
        on_event: Optional callback receiving every ParseEvent
        show_progress: Show a tqdm progress bar over the lines

    Returns:
        The assembled Bible
    """
    reader = GutenbergReader(on_event=on_event)
    lines = text.splitlines()

    for line_num, line in enumerate(
            tqdm(lines, desc="Parsing", unit="line", disable=not show_progress), start=1):
        reader.feed(line, line_num)

    return reader.finish()


def parse_bible_file(file_path: str, on_event: Optional[EventHandler] = None, show_progress: bool = False) -> Bible:
    """
    Read and parse a Gutenberg Bible text file.

    Args:
        file_path: Path to the Bible text file
        on_event: Optional callback receiving every ParseEvent
        show_progress: Show a tqdm progress bar over the lines

    Returns:
        The assembled Bible

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    return parse_gutenberg(content, on_event=on_event, show_progress=show_progress)
