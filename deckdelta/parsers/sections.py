"""
Section splitting for line-oriented deck lists.

Lines are routed into three buckets (mainboard, sideboard, commander)
by a small state machine:

    IN_MAIN                --"Sideboard"/"SB"-->          IN_SIDEBOARD_EXPLICIT
    IN_MAIN                --blank after content-->       IN_SIDEBOARD_IMPLICIT
    any                    --"Commander"/"Command Zone"--> IN_COMMANDER
    IN_COMMANDER           --blank after content-->       IN_MAIN
    any                    --"Mainboard"/"Main"/"Deck"--> IN_MAIN

The blank-line transition into the sideboard is disabled once an explicit
sideboard header has been seen. Comment lines are dropped and never
count as content.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

SIDEBOARD_HEADER = re.compile(r"^\s*(sideboard|sb)\s*[:.]?\s*$", re.IGNORECASE)
MAINBOARD_HEADER = re.compile(r"^\s*(mainboard|main|deck)\s*[:.]?\s*$", re.IGNORECASE)
COMMANDER_HEADER = re.compile(
    r"^\s*(commander|commanders|command zone)\s*[:.]?\s*$", re.IGNORECASE
)
COMMENT_LINE = re.compile(r"^\s*(//|#)")
LINE_BREAK = re.compile(r"\r?\n")


class SectionState(str, Enum):
    """Where the next card line is routed."""

    IN_MAIN = "in_main"
    IN_COMMANDER = "in_commander"
    IN_SIDEBOARD_IMPLICIT = "in_sideboard_implicit"
    IN_SIDEBOARD_EXPLICIT = "in_sideboard_explicit"


def is_header(line: str) -> bool:
    return bool(
        COMMANDER_HEADER.match(line) or SIDEBOARD_HEADER.match(line) or MAINBOARD_HEADER.match(line)
    )


def is_comment(line: str) -> bool:
    return bool(COMMENT_LINE.match(line))


@dataclass
class SectionSplit:
    """Raw card lines per bucket, trimmed, in input order."""

    main_lines: list[str] = field(default_factory=list)
    side_lines: list[str] = field(default_factory=list)
    commander_lines: list[str] = field(default_factory=list)


class SectionSplitter:
    """Feeds lines one at a time through the section state machine."""

    def __init__(self) -> None:
        self.state = SectionState.IN_MAIN
        self.split = SectionSplit()
        self.found_explicit_sideboard = False

    def _bucket(self) -> list[str]:
        if self.state == SectionState.IN_COMMANDER:
            return self.split.commander_lines
        if self.state == SectionState.IN_MAIN:
            return self.split.main_lines
        return self.split.side_lines

    def feed(self, line: str) -> SectionState:
        """Route one line and return the state after it."""
        trimmed = line.strip()

        if COMMANDER_HEADER.match(trimmed):
            self.state = SectionState.IN_COMMANDER
        elif SIDEBOARD_HEADER.match(trimmed):
            self.state = SectionState.IN_SIDEBOARD_EXPLICIT
            self.found_explicit_sideboard = True
        elif MAINBOARD_HEADER.match(trimmed):
            self.state = SectionState.IN_MAIN
        elif not trimmed:
            self._on_blank()
        elif not is_comment(trimmed):
            self._bucket().append(trimmed)

        return self.state

    def _on_blank(self) -> None:
        if self.state == SectionState.IN_COMMANDER:
            if self.split.commander_lines:
                self.state = SectionState.IN_MAIN
        elif self.state == SectionState.IN_MAIN:
            if self.split.main_lines and not self.found_explicit_sideboard:
                self.state = SectionState.IN_SIDEBOARD_IMPLICIT


def split_sections(raw_text: str) -> SectionSplit:
    """Split deck text into mainboard, sideboard and commander lines."""
    splitter = SectionSplitter()
    for line in LINE_BREAK.split(raw_text):
        splitter.feed(line)
    return splitter.split
