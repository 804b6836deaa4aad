"""
Deck API endpoints.

Stateless endpoints for parsing deck text and diffing two deck versions.
Nothing is stored; every request is a pure transformation.
"""

import logging
from typing import Any, Literal

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from deckdelta.config import settings
from deckdelta.models.deck import CardEntry
from deckdelta.parsers import parse
from deckdelta.services.changelog import render
from deckdelta.services.differ import compute_diff

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


class ParseRequest(BaseModel):
    """Request model for parsing deck text."""

    text: str = Field(
        ...,
        description="Raw deck text (plain list, CSV, or Arena/MTGO/Moxfield export)",
        examples=["Commander\n1 Atraxa, Praetors' Voice\n\n1 Sol Ring (c21) [263] *F*"],
    )


class CardEntryResponse(BaseModel):
    """A single parsed card line."""

    key: str
    name: str
    quantity: int
    set_code: str = ""
    collector_number: str = ""
    is_foil: bool = False


class ParsedDeckResponse(BaseModel):
    """Response model for a parsed deck."""

    mainboard: list[CardEntryResponse] = Field(default_factory=list)
    sideboard: list[CardEntryResponse] = Field(default_factory=list)
    commanders: list[str] = Field(default_factory=list)
    mainboard_count: int = 0
    sideboard_count: int = 0


class DiffRequest(BaseModel):
    """Request model for diffing two deck versions."""

    before: str = Field(default="", description="Earlier deck text")
    after: str = Field(default="", description="Later deck text")


class ChangelogRequest(DiffRequest):
    """Request model for rendering a diff."""

    format: Literal["text", "reddit", "mpcfill", "json"] = Field(
        default="text",
        description="Output format: text changelog, reddit markdown, MPC fill list, or JSON",
    )


class ChangelogResponse(BaseModel):
    """Response model for a rendered diff."""

    format: str
    content: str


def _check_length(*texts: str) -> None:
    limit = settings.max_deck_text_length
    for text in texts:
        if len(text) > limit:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Deck text exceeds {limit} characters",
            )


def _entry_response(entry: CardEntry) -> CardEntryResponse:
    return CardEntryResponse(
        key=entry.key,
        name=entry.display_name,
        quantity=entry.quantity,
        set_code=entry.set_code,
        collector_number=entry.collector_number,
        is_foil=entry.is_foil,
    )


@router.post("/parse", response_model=ParsedDeckResponse)
async def parse_deck(request: ParseRequest) -> ParsedDeckResponse:
    """
    Parse deck text into mainboard, sideboard and commanders.

    Unrecognized lines are dropped, never reported.
    """
    _check_length(request.text)
    deck = parse(request.text)

    logger.info(
        "deck_parsed",
        extra={
            "mainboard_unique": len(deck.mainboard),
            "sideboard_unique": len(deck.sideboard),
            "commanders": len(deck.commanders),
        },
    )

    return ParsedDeckResponse(
        mainboard=[_entry_response(e) for e in deck.mainboard.values()],
        sideboard=[_entry_response(e) for e in deck.sideboard.values()],
        commanders=list(deck.commanders),
        mainboard_count=deck.total_cards("mainboard"),
        sideboard_count=deck.total_cards("sideboard"),
    )


@router.post("/diff")
async def diff_decks(request: DiffRequest) -> dict[str, Any]:
    """
    Diff two versions of a deck.

    Returns cards in, cards out, quantity changes and printing changes
    for the mainboard and the sideboard.
    """
    _check_length(request.before, request.after)
    diff = compute_diff(parse(request.before), parse(request.after))

    logger.info(
        "deck_diffed",
        extra={
            "mainboard_changed": not diff.mainboard.is_empty,
            "sideboard_changed": not diff.sideboard.is_empty,
        },
    )

    return diff.to_dict()


@router.post("/changelog", response_model=ChangelogResponse)
async def deck_changelog(request: ChangelogRequest) -> ChangelogResponse:
    """Render the diff of two deck versions in an export format."""
    _check_length(request.before, request.after)
    diff = compute_diff(parse(request.before), parse(request.after))
    return ChangelogResponse(format=request.format, content=render(diff, request.format))
