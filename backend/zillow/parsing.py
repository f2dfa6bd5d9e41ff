# backend/zillow/parsing.py
from datetime import datetime, timezone
from typing import List, Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString
from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.py_models.listing import Address, Listing, OpenHouse

__all__ = ["decode_date", "maybe_parse_event", "extract_meta", "extract_ld_json", "is_ld_json_script"]

LD_JSON_TYPE = "application/ld+json"


# --- dates --------------------------------------------------------------------

def decode_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp ("2021-05-01T10:00:00Z", fractional seconds and
    offsets allowed). Returns None instead of raising on empty/malformed input;
    surrounding whitespace counts as malformed. Naive timestamps are taken as UTC.
    """
    if not value:
        return None
    try:
        dt = isoparse(value)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# --- JSON-LD ------------------------------------------------------------------

class LinkedDataObject(BaseModel):
    """The handful of JSON-LD keys we care about; everything else is ignored."""

    # only the JSON-LD spellings bind; "type" or "start_date" keys are ignored
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = Field(None, alias="@type")
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    name: Optional[str] = None


def maybe_parse_event(text: str, diagnostics: Optional[List[str]] = None) -> Optional[OpenHouse]:
    """
    Turn one JSON-LD text value into an OpenHouse, or None if it is not valid
    JSON, not an object of the expected shape, or not an "Event".
    A date that fails to parse is left as None; the event is still returned.
    """
    notes = diagnostics if diagnostics is not None else []
    try:
        data = LinkedDataObject.model_validate_json(text)
    except ValidationError as e:
        errs = e.errors()
        if errs and errs[0].get("type") == "json_invalid":
            notes.append("discarded JSON-LD block: invalid JSON")
        else:
            notes.append(f"discarded JSON-LD block: unexpected shape ({e.error_count()} errors)")
        return None

    if data.type != "Event":
        notes.append(f"discarded JSON-LD object of type {data.type!r}")
        return None

    event = OpenHouse(name=data.name or "")
    # a missing date is not worth a note, only one that fails to decode
    event.start = decode_date(data.start_date)
    if data.start_date and event.start is None:
        notes.append(f"unparsed startDate {data.start_date!r} for event {event.name!r}")
    event.end = decode_date(data.end_date)
    if data.end_date and event.end is None:
        notes.append(f"unparsed endDate {data.end_date!r} for event {event.name!r}")
    return event


def is_ld_json_script(tag: Tag) -> bool:
    return tag.get("type") == LD_JSON_TYPE


def _text_children(tag: Tag):
    # Comments, CDATA, doctypes etc. are PreformattedString subclasses
    for child in tag.children:
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            yield str(child)


def extract_ld_json(tag: Tag, listing: Listing, diagnostics: Optional[List[str]] = None) -> None:
    """Each text child is parsed on its own; accepted events are appended in order."""
    for text in _text_children(tag):
        event = maybe_parse_event(text, diagnostics)
        if event is not None:
            listing.open_houses.append(event)


# --- meta tags ----------------------------------------------------------------

def _attr(tag: Tag, key: str) -> str:
    val = tag.get(key)
    if val is None:
        return ""
    # bs4 hands back multi-valued attributes as lists
    if isinstance(val, list):
        return " ".join(val)
    return val


def extract_meta(tag: Tag, listing: Listing, diagnostics: Optional[List[str]] = None) -> None:
    """
    Copy the content of a recognised <meta> onto the listing. Later tags
    overwrite earlier ones; a missing content attribute writes "".
    """
    name = _attr(tag, "name")
    prop = _attr(tag, "property")
    content = _attr(tag, "content")

    if name == "description":
        listing.description = content
    elif prop == "og:image":
        listing.photo_url = content
    elif prop == "og:zillow_fb:address":
        listing.address = Address(value=content)
    elif name == "canonical":
        # Zillow pages do not use this; link[rel=canonical] is the usual carrier.
        listing.canonical_url = content
