"""
Card line matchers.

Each matcher is a pure function from a single (already prefix-stripped)
line to either Matched or NoMatch. Matchers are tried in order, most
specific first; the first Matched wins.

Supported shapes:
    4 Lightning Bolt (M10) [227] *F*    full metadata, bracketed collector number
    1x Dragon Tempest (pdtk) 136p       bare collector number after a set code
    2 Counterspell (MH2)                set code only
    4,Lightning Bolt / 4,"Sol Ring"     quantity,name pairs
    4X Lightning Bolt                   quantity + x + name
    Lightning Bolt                      bare name, quantity 1
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

# Groups: (quantity, name, set_code, bracketed_number, bare_number, foil)
# The bare collector number only matches after a set code so that words of
# the card name are never taken as a collector number.
FULL_PATTERN = re.compile(
    r"^(\d+)\s*x?\s+(.+?)"
    r"(?:\s+\(([A-Za-z0-9]+)\)(?:\s+\[([\w-]+)\]|\s+([\w-]+))?)?"
    r"(\s+\*F\*)?\s*$",
    re.ASCII,
)

# Groups: (quantity, name)
CSV_PAIR_PATTERN = re.compile(r'^(\d+)\s*,\s*"?([^"]+)"?\s*$')

# Groups: (quantity, name)
SIMPLE_PATTERN = re.compile(r"^(\d+)\s*x?\s+(.+)$", re.IGNORECASE)

NUMERIC_ONLY = re.compile(r"^\d+$")


@dataclass(frozen=True, slots=True)
class Matched:
    """A line recognized as a card."""

    quantity: int
    name: str
    set_code: str = ""
    collector_number: str = ""
    is_foil: bool = False


@dataclass(frozen=True, slots=True)
class NoMatch:
    """The line does not have this matcher's shape."""


NO_MATCH = NoMatch()

LineOutcome = Matched | NoMatch
LineMatcher = Callable[[str], LineOutcome]


def match_full(line: str) -> LineOutcome:
    match = FULL_PATTERN.match(line)
    if not match:
        return NO_MATCH
    quantity, name, set_code, bracketed, bare, foil = match.groups()
    return Matched(
        quantity=int(quantity),
        name=name,
        set_code=set_code or "",
        collector_number=bracketed or bare or "",
        is_foil=foil is not None,
    )


def match_csv_pair(line: str) -> LineOutcome:
    match = CSV_PAIR_PATTERN.match(line)
    if not match:
        return NO_MATCH
    return Matched(quantity=int(match.group(1)), name=match.group(2))


def match_simple(line: str) -> LineOutcome:
    match = SIMPLE_PATTERN.match(line)
    if not match:
        return NO_MATCH
    return Matched(quantity=int(match.group(1)), name=match.group(2))


def match_bare_name(line: str) -> LineOutcome:
    """Fallback: the whole line is a card name. Pure numbers are rejected."""
    stripped = line.strip()
    if not stripped or NUMERIC_ONLY.match(stripped):
        return NO_MATCH
    return Matched(quantity=1, name=stripped)


LINE_MATCHERS: tuple[LineMatcher, ...] = (
    match_full,
    match_csv_pair,
    match_simple,
    match_bare_name,
)
