"""
Output encodings for a parsed Bible.

- JSON tree: the nested book/chapter/verse shape of ``Bible.to_dict``
- keyed JSON: {testament: {book: {chapter: {verse: text}}}}
- CSV: one record per verse
- binary: length-prefixed records
"""

import csv
import json
import struct
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from models import Bible, Book, Chapter, Testament, Verse

BINARY_MAGIC = b"GBIB"
BINARY_VERSION = 1

_U32 = struct.Struct("<I")

CSV_FIELDS = ['testament', 'book', 'chapter', 'verse', 'reference', 'text']


class BibleFormatError(ValueError):
    """Raised when serialized Bible data cannot be decoded."""


# JSON -------------------------------------------------------------------------
def write_json(bible: Bible, path: str) -> Path:
    """
    Write the Bible as a pretty-printed JSON tree.

    Args:
        bible: The parsed Bible
        path: Output file path

    Returns:
        The output path
    """
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(bible.to_dict(), f, indent=2, ensure_ascii=False)
    return path


def read_json(path: str) -> Bible:
    """
    Read a JSON tree written by ``write_json``.

    Raises:
        FileNotFoundError: If the file does not exist
        BibleFormatError: If the file is not a valid Bible tree
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise BibleFormatError(f"Invalid JSON in {path}: {e}") from e

    try:
        return Bible.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise BibleFormatError(f"Unexpected JSON structure in {path}: {e!r}") from e


def to_keyed_dict(bible: Bible) -> Dict[str, Dict]:
    """
    Build the object-of-objects shape keyed by book name, chapter and verse number.

    A repeated book name or chapter number merges into the earlier entry.
    """
    keyed = {}
    for testament in Testament:
        books = {}
        for book in bible.books(testament):
            chapters = books.setdefault(book.name, {})
            for chapter in book.chapters:
                verses = chapters.setdefault(chapter.number, {})
                for verse in chapter.verses:
                    verses[verse.number] = verse.text
        keyed[testament.label] = books
    return keyed


def write_keyed_json(bible: Bible, path: str) -> Path:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(to_keyed_dict(bible), f, indent=2, ensure_ascii=False)
    return path


# CSV --------------------------------------------------------------------------
def verse_records(bible: Bible) -> Iterator[Dict[str, str]]:
    """
    Flatten the Bible into one record per verse, in document order.

    Yields:
        Dictionaries with testament, book, chapter, verse, reference and text keys
    """
    for testament in Testament:
        for book in bible.books(testament):
            for chapter in book.chapters:
                for verse in chapter.verses:
                    yield {
                        'testament': testament.value,
                        'book': book.name,
                        'chapter': chapter.number,
                        'verse': verse.number,
                        'reference': f"{book.name} {chapter.number}:{verse.number}",
                        'text': verse.text
                    }


def write_csv(bible: Bible, path: str) -> Path:
    path = Path(path)
    with open(path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=CSV_FIELDS)
        writer.writeheader()
        writer.writerows(verse_records(bible))
    return path


# Binary -----------------------------------------------------------------------
# Layout (little-endian):
#   magic "GBIB", u32 version,
#   then for each of ot_contents, ot, nt_contents, nt:
#     u32 count, followed by that many strings or books.
#   string  = u32 byte length + UTF-8 bytes
#   book    = string name, u32 chapter count, chapters
#   chapter = string number, u32 verse count, verses
#   verse   = string number, string text

def _pack_str(out: List[bytes], value: str) -> None:
    data = value.encode('utf-8')
    out.append(_U32.pack(len(data)))
    out.append(data)


def _pack_books(out: List[bytes], books: List[Book]) -> None:
    out.append(_U32.pack(len(books)))
    for book in books:
        _pack_str(out, book.name)
        out.append(_U32.pack(len(book.chapters)))
        for chapter in book.chapters:
            _pack_str(out, chapter.number)
            out.append(_U32.pack(len(chapter.verses)))
            for verse in chapter.verses:
                _pack_str(out, verse.number)
                _pack_str(out, verse.text)


def encode_binary(bible: Bible) -> bytes:
    """
    Encode the Bible as length-prefixed binary records.

    Args:
        bible: The parsed Bible

    Returns:
        Encoded bytes
    """
    out = [BINARY_MAGIC, _U32.pack(BINARY_VERSION)]
    for names, books in ((bible.ot_contents, bible.ot), (bible.nt_contents, bible.nt)):
        out.append(_U32.pack(len(names)))
        for name in names:
            _pack_str(out, name)
        _pack_books(out, books)
    return b"".join(out)


class _BinaryReader:
    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise BibleFormatError(
                f"Truncated data: needed {size} bytes at offset {self.offset}"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self.take(_U32.size))[0]

    def string(self) -> str:
        raw = self.take(self.u32())
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise BibleFormatError(f"Invalid UTF-8 at offset {self.offset - len(raw)}") from e

    def strings(self) -> List[str]:
        return [self.string() for _ in range(self.u32())]

    def books(self) -> List[Book]:
        books = []
        for _ in range(self.u32()):
            name = self.string()
            chapters = []
            for _ in range(self.u32()):
                number = self.string()
                verses = [Verse(self.string(), self.string()) for _ in range(self.u32())]
                chapters.append(Chapter(number, verses))
            books.append(Book(name, chapters))
        return books


def decode_binary(data: bytes) -> Bible:
    """
    Decode bytes produced by ``encode_binary``.

    Raises:
        BibleFormatError: On a bad header, truncated data or trailing bytes
    """
    reader = _BinaryReader(data)
    if reader.take(len(BINARY_MAGIC)) != BINARY_MAGIC:
        raise BibleFormatError("Not a Bible binary file (bad magic)")

    version = reader.u32()
    if version != BINARY_VERSION:
        raise BibleFormatError(f"Unsupported binary version: {version}")

    bible = Bible(
        ot_contents=reader.strings(),
        ot=reader.books(),
        nt_contents=reader.strings(),
        nt=reader.books()
    )

    if reader.offset != len(data):
        raise BibleFormatError(f"{len(data) - reader.offset} trailing bytes after Bible data")
    return bible


def write_binary(bible: Bible, path: str) -> Path:
    path = Path(path)
    with open(path, 'wb') as f:
        f.write(encode_binary(bible))
    return path


def read_binary(path: str) -> Bible:
    with open(path, 'rb') as f:
        return decode_binary(f.read())


WRITERS = {
    'json': (write_json, '.json'),
    'keyed': (write_keyed_json, '.keyed.json'),
    'csv': (write_csv, '.csv'),
    'bin': (write_binary, '.bin'),
}


def write_outputs(bible: Bible, output_dir: str, stem: str, formats: List[str]) -> List[Tuple[str, Path]]:
    """
    Write the Bible in each requested format.

    Args:
        bible: The parsed Bible
        output_dir: Directory for the output files
        stem: File name stem (e.g. "bible")
        formats: Format names from WRITERS

    Returns:
        List of (format, path) written

    Raises:
        ValueError: If a format is unknown
    """
    unknown = [fmt for fmt in formats if fmt not in WRITERS]
    if unknown:
        raise ValueError(f"Unknown output format(s): {', '.join(unknown)}. Use {', '.join(WRITERS)}")

    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for fmt in formats:
        writer, suffix = WRITERS[fmt]
        written.append((fmt, writer(bible, directory / f"{stem}{suffix}")))
    return written
