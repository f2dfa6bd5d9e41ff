import asyncio
import json
import logging

from backend.zillow.client import DEFAULT_TIMEOUT
from backend.zillow.scraper import collect_listings

SAMPLE_URLS = [
    "https://www.zillow.com/homedetails/361-Blaine-St-Seattle-WA-98109/48689963_zpid/",
    "https://www.zillow.com/homedetails/2854-S-Nevada-St-Seattle-WA-98108/70579954_zpid/",
    "https://www.zillow.com/homedetails/1109-122nd-Ave-E-Puyallup-WA-98372/2061905748_zpid/",
]


def parse_args(argv=None):
    import argparse
    p = argparse.ArgumentParser(description="Extract listing details from Zillow home pages")
    p.add_argument(
        "urls",
        nargs="*",
        help="Listing page URLs (defaults to a few sample Seattle-area homes)",
    )
    p.add_argument("--concurrency", type=int, default=5)
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Per-request timeout in seconds")
    p.add_argument("--output", help="Optional path to save results as .json")
    p.add_argument("--print-details", action="store_true", help="Print each listing to stdout")
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging for the zillow scraper")
    return p.parse_args(argv)


def format_listing(l) -> str:
    addr = l.address.value or "(no address)"
    lines = [f"- {addr} | {l.url}"]
    if l.description:
        lines.append(f"    {l.description}")
    if l.photo_url:
        lines.append(f"    photo: {l.photo_url}")
    for oh in l.open_houses:
        start = oh.start.isoformat() if oh.start else "?"
        end = oh.end.isoformat() if oh.end else "?"
        lines.append(f"    open house: {oh.name or 'unnamed'} {start} -> {end}")
    return "\n".join(lines)


async def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s"
    )
    if args.verbose:
        logging.getLogger("zillow").setLevel(logging.DEBUG)

    urls = args.urls or SAMPLE_URLS
    listings = await collect_listings(urls, concurrency=args.concurrency, timeout=args.timeout)

    if args.print_details:
        for l in listings:
            print(format_listing(l))

    if args.output:
        out_path = args.output
        if out_path.lower().endswith(".json"):
            rows = [l.model_dump(mode="json", exclude={"diagnostics"}) for l in listings]
            with open(out_path, "w", encoding="utf-8") as f:
                json.dump(rows, f, indent=2, ensure_ascii=False)
            print(f"Saved {len(rows)} listings to {out_path}")
        else:
            print(f"[warn] Unknown output format for '{out_path}'. Use .json")

    print(f"\nCollected {len(listings)}/{len(urls)} listing(s).")
    return listings


if __name__ == "__main__":
    asyncio.run(main())
