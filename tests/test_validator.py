import models
from models import Bible, Book, Chapter, Verse
from validator import (
    KJV_CHAPTER_COUNTS,
    Severity,
    canonical_book_names,
    has_errors,
    validate_bible,
    verse_length_stats,
)


def full_bible():
    """A structurally complete Bible with one-verse chapters."""
    bible = Bible()
    for name, testament, count in KJV_CHAPTER_COUNTS:
        chapters = [Chapter(str(n), [Verse("1", f"{name} {n}:1")]) for n in range(1, count + 1)]
        bible.books(testament).append(Book(name, chapters))
        bible.contents(testament).append(name)
    return bible


def messages(issues):
    return [str(issue) for issue in issues]


def test_canonical_table():
    assert len(canonical_book_names(models.Testament.OLD)) == 39
    assert len(canonical_book_names(models.Testament.NEW)) == 27
    assert canonical_book_names()[0] == "Genesis"
    assert canonical_book_names()[-1] == "Revelation"


def test_complete_bible_has_no_issues():
    assert validate_bible(full_bible()) == []


def test_wrong_chapter_count():
    bible = full_bible()
    bible.find_book("Ruth").chapters.pop()
    issues = validate_bible(bible)
    assert messages(issues) == ["[error] Ruth: has 3 chapters (expected 4)"]
    assert has_errors(issues)


def test_missing_and_duplicate_books():
    bible = full_bible()
    jude = bible.nt.pop(-2)
    bible.nt.append(Book("John", [Chapter("1", [Verse("1", "In the beginning was the Word")])]))
    found = messages(validate_bible(bible))
    assert "[error] John: appears 2 times" in found
    assert "[error] Jude: missing from the New Testament" in found
    assert "[warning] Jude: listed in the table of contents but not parsed" in found
    assert jude.name == "Jude"


def test_book_in_wrong_testament():
    bible = full_bible()
    bible.nt.append(bible.ot.pop(0))
    found = messages(validate_bible(bible))
    assert "[error] Genesis: unexpected book in the New Testament" in found
    assert "[error] Old Testament has 38 books (expected 39)" in found


def test_empty_verse_text_is_reported():
    bible = full_bible()
    bible.find_book("Obadiah").chapters[0].verses[0].text = " "
    assert messages(validate_bible(bible)) == ["[error] Obadiah: 1:1 has empty text"]


def test_missing_contents_is_only_a_warning():
    bible = full_bible()
    bible.ot_contents.clear()
    issues = validate_bible(bible)
    assert [issue.severity for issue in issues] == [Severity.WARNING]
    assert not has_errors(issues)


def test_verse_length_stats(sample_bible):
    stats = verse_length_stats(sample_bible)
    assert stats["count"] == 11
    assert stats["shortest"] == {"reference": "John 11:35", "length": len("Jesus wept.")}
    assert stats["longest"]["reference"] == "1 Samuel 1:2"
    assert stats["mean"] > 0


def test_verse_length_stats_empty():
    assert verse_length_stats(Bible()) == {"count": 0}
