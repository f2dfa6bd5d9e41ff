import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup, ParserRejectedMarkup

from backend.py_models.listing import Listing, ListingState
from backend.zillow.client import DEFAULT_TIMEOUT, fetch_page, new_client
from backend.zillow.errors import InputError, ListingError, ParseError
from backend.zillow.walker import DEFAULT_RULES, ExtractionRule, walk

log = logging.getLogger("zillow")


def new_listing(url: str) -> Listing:
    return Listing(url=url)


def parse_document(content: bytes) -> BeautifulSoup:
    try:
        return BeautifulSoup(content, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(f"could not parse page: {e}") from e


async def populate(
    listing: Listing,
    client: Optional[httpx.AsyncClient] = None,
    rules: Sequence[ExtractionRule] = DEFAULT_RULES,
) -> Listing:
    """
    Fetch the listing's page once and fill in whatever fields it carries.

    On any ListingError (or cancellation) the listing is left FAILED with only
    its URL set and the error propagates. A page with nothing recognisable on
    it still ends up POPULATED.
    """
    if listing.state != ListingState.EMPTY:
        raise InputError(f"listing {listing.url!r} is already {listing.state.value}")

    listing.state = ListingState.POPULATING
    try:
        result = await fetch_page(listing.url, client)
        soup = parse_document(result.content)
    except BaseException:
        # never leave the listing POPULATING
        listing.state = ListingState.FAILED
        raise

    walk(soup, listing, rules)
    for note in listing.diagnostics:
        log.debug("%s: %s", listing.url, note)

    listing.state = ListingState.POPULATED
    log.info(
        "populated %s: %d open house(s), %d discarded item(s)",
        listing.url, len(listing.open_houses), len(listing.diagnostics),
    )
    return listing


async def collect_listings(
    urls: Iterable[str],
    concurrency: int = 5,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Listing]:
    """
    Populate one Listing per URL, at most `concurrency` at a time.
    Listings that fail are logged and left out; order follows `urls`.
    """
    listings = [new_listing(u) for u in urls]
    sem = asyncio.Semaphore(max(1, concurrency))

    async with new_client(timeout=timeout, transport=transport) as client:

        async def bound_populate(listing: Listing) -> Optional[Listing]:
            async with sem:
                try:
                    return await populate(listing, client)
                except ListingError as e:
                    log.warning("skipping %s: %s", listing.url, e)
                    return None

        results = await asyncio.gather(*(bound_populate(l) for l in listings))

    return [l for l in results if l is not None]
