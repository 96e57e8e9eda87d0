"""
Data model for a parsed Bible: testament -> book -> chapter -> verse.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


class Testament(Enum):
    """The two top-level partitions of the document's books."""
    OLD = "old"
    NEW = "new"

    @property
    def label(self) -> str:
        return "Old Testament" if self is Testament.OLD else "New Testament"


@dataclass
class Verse:
    """A single verse. Number is kept exactly as it appeared in the source."""
    number: str
    text: str = ""

    def to_dict(self) -> Dict:
        return {"number": self.number, "text": self.text}


@dataclass
class Chapter:
    """A chapter and its verses in source order."""
    number: str
    verses: List[Verse] = field(default_factory=list)

    def verse(self, number: str) -> Optional[Verse]:
        for verse in self.verses:
            if verse.number == number:
                return verse
        return None

    def to_dict(self) -> Dict:
        return {
            "number": self.number,
            "verses": [verse.to_dict() for verse in self.verses]
        }


@dataclass
class Book:
    """A book identified by its canonical name."""
    name: str
    chapters: List[Chapter] = field(default_factory=list)

    def chapter(self, number: str) -> Optional[Chapter]:
        for chapter in self.chapters:
            if chapter.number == number:
                return chapter
        return None

    @property
    def verse_count(self) -> int:
        return sum(len(chapter.verses) for chapter in self.chapters)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "chapters": [chapter.to_dict() for chapter in self.chapters]
        }


@dataclass
class Bible:
    """
    The assembled document.

    ``ot_contents`` and ``nt_contents`` hold the book names declared by the
    table of contents, when the source has one. They are only used to
    cross-check the parsed books.
    """
    ot_contents: List[str] = field(default_factory=list)
    ot: List[Book] = field(default_factory=list)
    nt_contents: List[str] = field(default_factory=list)
    nt: List[Book] = field(default_factory=list)

    def books(self, testament: Testament) -> List[Book]:
        return self.ot if testament is Testament.OLD else self.nt

    def contents(self, testament: Testament) -> List[str]:
        return self.ot_contents if testament is Testament.OLD else self.nt_contents

    def all_books(self) -> Iterator[Book]:
        """Iterate over every book, Old Testament first."""
        yield from self.ot
        yield from self.nt

    def find_book(self, name: str) -> Optional[Book]:
        for book in self.all_books():
            if book.name == name:
                return book
        return None

    def to_dict(self) -> Dict:
        return {
            "ot_contents": list(self.ot_contents),
            "ot": [book.to_dict() for book in self.ot],
            "nt_contents": list(self.nt_contents),
            "nt": [book.to_dict() for book in self.nt]
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Bible":
        """
        Rebuild a Bible from the nested shape produced by ``to_dict``.

        Args:
            data: Dictionary with ot_contents, ot, nt_contents and nt keys

        Returns:
            Bible instance
        """
        def build_books(items: List[Dict]) -> List[Book]:
            return [
                Book(
                    name=item["name"],
                    chapters=[
                        Chapter(
                            number=chapter["number"],
                            verses=[Verse(v["number"], v["text"]) for v in chapter["verses"]]
                        )
                        for chapter in item["chapters"]
                    ]
                )
                for item in items
            ]

        return cls(
            ot_contents=list(data.get("ot_contents", [])),
            ot=build_books(data.get("ot", [])),
            nt_contents=list(data.get("nt_contents", [])),
            nt=build_books(data.get("nt", []))
        )
