"""Render-time validation of feed documents.

Everything here is a pure function of the document. The renderer calls
``validate`` at the start of every render, so a field removed after the
renderer was created is caught on the next render.
"""

import re
from datetime import datetime, timezone
from typing import Any, List

import dateutil.parser
from lxml import etree

from feedwriter.constants import IMAGE_MAX_HEIGHT, IMAGE_MAX_WIDTH
from feedwriter.exceptions import ErrorKind, FeedWriterError
from feedwriter.model.document import Category, FeedDocument, FeedEntry, Image

# Characters outside the XML 1.0 Char production
_NON_XML_CHAR = re.compile(r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def coerce_timestamp(value: Any) -> datetime:
    """Convert a datetime, epoch seconds or date string to an aware datetime.

    Naive values are taken as UTC.

    Raises:
        TypeError: For unsupported value types.
        ValueError: For strings that are not dates.
    """
    if isinstance(value, bool):
        raise TypeError(f"Not a timestamp: {value!r}")
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, (int, float)):
        result = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            result = datetime.fromtimestamp(int(text), tz=timezone.utc)
        else:
            result = dateutil.parser.parse(text)
    else:
        raise TypeError(f"Not a timestamp: {value!r}")

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def _check_xml_text(problems: List[str], label: str, value: str) -> None:
    match = _NON_XML_CHAR.search(value)
    if match:
        problems.append(
            f"{label} contains a character XML cannot hold: U+{ord(match.group()):04X}"
        )


def _check_required_text(problems: List[str], label: str, value: Any) -> None:
    if value is None or value == "":
        problems.append(f"{label} is required")
    elif not isinstance(value, str):
        problems.append(f"{label} must be text, got {type(value).__name__}")
    else:
        _check_xml_text(problems, label, value)


def _check_optional_text(problems: List[str], label: str, value: Any) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        problems.append(f"{label} must be text, got {type(value).__name__}")
    elif value == "":
        problems.append(f"{label} must not be empty")
    else:
        _check_xml_text(problems, label, value)


def _check_encoding(problems: List[str], encoding: Any) -> None:
    if not isinstance(encoding, str) or not encoding:
        problems.append("Feed encoding must be a non-empty string")
        return
    # libxml2 writes fewer encodings than codecs.lookup knows
    try:
        etree.tostring(etree.Element("rss"), encoding=encoding, xml_declaration=True)
    except (LookupError, ValueError):
        problems.append(f"Unknown feed encoding '{encoding}'")


def _check_timestamp(problems: List[str], label: str, value: Any) -> None:
    if value is None:
        return
    try:
        coerce_timestamp(value)
    except (TypeError, ValueError, OverflowError, OSError):
        problems.append(f"{label} is not a valid date: {value!r}")


def _check_dimension(problems: List[str], label: str, value: Any, maximum: int) -> None:
    if value is None:
        return
    if isinstance(value, bool):
        valid = False
    elif isinstance(value, int):
        valid = value >= 0
    elif isinstance(value, str):
        valid = value.isascii() and value.isdigit()
    else:
        valid = False

    if not valid:
        problems.append(f"Image {label} must be a non-negative integer, got {value!r}")
    elif int(value) > maximum:
        problems.append(f"Image {label} must not exceed {maximum}, got {value}")


def _check_image(problems: List[str], image: Image) -> None:
    _check_required_text(problems, "Image uri", image.uri)
    _check_required_text(problems, "Image link", image.link)
    _check_required_text(problems, "Image title", image.title)
    _check_optional_text(problems, "Image description", image.description)
    _check_dimension(problems, "height", image.height, IMAGE_MAX_HEIGHT)
    _check_dimension(problems, "width", image.width, IMAGE_MAX_WIDTH)


def _check_categories(problems: List[str], owner: str, categories: List[Category]) -> None:
    for index, category in enumerate(categories):
        _check_required_text(problems, f"{owner} category #{index + 1} term", category.term)
        _check_optional_text(problems, f"{owner} category #{index + 1} label", category.label)
        _check_optional_text(problems, f"{owner} category #{index + 1} scheme", category.scheme)


def _check_entry(problems: List[str], index: int, entry: FeedEntry) -> None:
    owner = f"Entry #{index + 1}"
    if not entry.title and not entry.description:
        problems.append(f"{owner} needs a title or a description")
    _check_optional_text(problems, f"{owner} title", entry.title)
    _check_optional_text(problems, f"{owner} description", entry.description)
    _check_optional_text(problems, f"{owner} link", entry.link)
    _check_optional_text(problems, f"{owner} id", entry.id)
    _check_timestamp(problems, f"{owner} date", entry.date_modified)
    for author_index, author in enumerate(entry.authors):
        _check_required_text(problems, f"{owner} author #{author_index + 1} name", author.name)
    _check_categories(problems, owner, entry.categories)


def find_problems(document: FeedDocument) -> List[str]:
    """Return every rule the document breaks, in a stable order."""
    problems: List[str] = []

    _check_required_text(problems, "Feed title", document.title)
    _check_required_text(problems, "Feed description", document.description)
    _check_required_text(problems, "Feed link", document.link)

    _check_encoding(problems, document.encoding)

    _check_timestamp(problems, "Feed date modified", document.date_modified)
    _check_timestamp(problems, "Feed last build date", document.last_build_date)
    _check_optional_text(problems, "Feed language", document.language)
    _check_optional_text(problems, "Feed copyright", document.copyright)
    _check_optional_text(problems, "Feed base URL", document.base_url)

    if document.generator is not None:
        _check_required_text(problems, "Generator name", document.generator.name)
        _check_optional_text(problems, "Generator version", document.generator.version)
        _check_optional_text(problems, "Generator uri", document.generator.uri)

    for kind, url in document.feed_links.items():
        _check_required_text(problems, f"Feed link for '{kind}'", url)

    for index, author in enumerate(document.authors):
        _check_required_text(problems, f"Author #{index + 1} name", author.name)

    _check_categories(problems, "Feed", document.categories)

    for index, hub in enumerate(document.hubs):
        _check_required_text(problems, f"Hub #{index + 1}", hub)

    if document.image is not None:
        _check_image(problems, document.image)

    for index, entry in enumerate(document.entries):
        _check_entry(problems, index, entry)

    return problems


def validate(document: FeedDocument) -> None:
    """Raise a VALIDATION error listing every problem with the document."""
    problems = find_problems(document)
    if problems:
        raise FeedWriterError(ErrorKind.VALIDATION, "; ".join(problems))
