"""
Single-pass walk over a parsed listing page.

Nodes are visited in pre-order document order with an explicit stack, so deep
or hostile markup cannot blow the recursion limit. Every element is checked
against every rule; a match never stops the walk or the other rules.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from backend.py_models.listing import Listing
from backend.zillow.parsing import extract_ld_json, extract_meta, is_ld_json_script

log = logging.getLogger("zillow")

Handler = Callable[[Tag, Listing, List[str]], None]


@dataclass(frozen=True)
class ExtractionRule:
    tag: str
    handler: Handler
    predicate: Optional[Callable[[Tag], bool]] = None

    def matches(self, node: Tag) -> bool:
        if node.name != self.tag:
            return False
        return self.predicate is None or self.predicate(node)


DEFAULT_RULES: Sequence[ExtractionRule] = (
    ExtractionRule("meta", extract_meta),
    ExtractionRule("script", extract_ld_json, is_ld_json_script),
)


def walk(
    root: BeautifulSoup,
    listing: Listing,
    rules: Sequence[ExtractionRule] = DEFAULT_RULES,
    diagnostics: Optional[List[str]] = None,
) -> int:
    """Dispatch every element under root to the matching rules. Returns the number of elements seen."""
    notes = diagnostics if diagnostics is not None else listing.diagnostics
    seen = 0
    stack = list(reversed(list(root.children)))
    while stack:
        node = stack.pop()
        if not isinstance(node, Tag):
            continue
        seen += 1
        for rule in rules:
            if rule.matches(node):
                rule.handler(node, listing, notes)
        # push in reverse so the first child is popped next
        stack.extend(reversed(list(node.children)))
    log.debug("walked %d elements for %s", seen, listing.url)
    return seen
