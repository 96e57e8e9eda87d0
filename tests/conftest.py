"""
Shared fixtures: a small Gutenberg-shaped sample and the optional full text.
"""

import os
from pathlib import Path

import pytest

from bible_parser import parse_gutenberg

SAMPLE_TEXT = """\
The Project Gutenberg eBook of The King James Bible

This eBook is for the use of anyone anywhere 1:1 at no cost.

*** START OF THE PROJECT GUTENBERG EBOOK THE KING JAMES BIBLE ***

The Old Testament of the King James Version of the Bible

The First Book of Moses: Called Genesis

The First Book of Samuel

The First Book of the Kings

The Second Book of the Kings

Hosea

The New Testament of the King James Bible

The Gospel According to Saint John

The Old Testament of the King James Version of the Bible

The First Book of Moses: Called Genesis


1:1 In the beginning God created the heaven and the earth.

1:2 And the earth was without form, and void; and darkness was upon
the face of the deep. And the Spirit of God moved upon the face of the
waters. 1:3 And God said, Let there be light: and there was light.

2:1 Thus the heavens and the earth were finished, and all the host of
them.



The First Book of Samuel

Otherwise Called:

The First Book of the Kings


1:1 Now there was a certain man of Ramathaimzophim, of mount Ephraim,
and his name was Elkanah:

1:2 And he had two wives; the name of the one was Hannah, and the name
of the other Peninnah: and Peninnah had children, but Hannah had no
children.



The First Book of the Kings

The Second Book of the Kings


1:1 Now king David was old and stricken in years; and they covered him
with clothes, but he gat no heat.



The Second Book of the Kings


1:1 Then Moab rebelled against Israel after the death of Ahab.



Hosea


1:1 The word of the LORD that came unto Hosea, the son of Beeri.



The New Testament of the King James Bible



The Gospel According to Saint John


3:16 For God so loved the world, that he gave his only begotten Son,
that whosoever believeth in him should not perish, but have
everlasting life.

11:35 Jesus wept.

*** END OF THE PROJECT GUTENBERG EBOOK THE KING JAMES BIBLE ***

Section 1. General Terms of Use 1:2 and Redistributing
"""


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def sample_bible():
    return parse_gutenberg(SAMPLE_TEXT)


@pytest.fixture(scope="session")
def reference_bible():
    """The full pg10.txt parse, or skip when the text is not available."""
    path = Path(os.environ.get("BIBLE_TEXT_FILE", "pg10.txt"))
    if not path.exists():
        pytest.skip(f"reference text not found: {path}")

    from bible_parser import parse_bible_file
    return parse_bible_file(str(path))
