"""
Changelog and export rendering for deck diffs.

Output formats:
    text     Plain-text changelog (email bodies, chat webhooks)
    reddit   Reddit-flavored markdown with [[card]] links
    mpcfill  "N Card Name" lines for cards that must be newly printed
    json     Structured export of the diff
"""

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Literal

from deckdelta.models.diff import DiffResult, DiffSection, PrintingChange

ExportFormat = Literal["text", "reddit", "mpcfill", "json"]

ARROW = "→"


def _now() -> datetime:
    """Clock shared by every export, in UTC."""
    return datetime.now(UTC)


def _format_timestamp(moment: datetime) -> str:
    """US style, e.g. "01/15/2025 3:42 PM"."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%m/%d/%Y} {hour}:{moment:%M} {meridiem}"


def build_header(diff: DiffResult, generated_at: datetime | None = None) -> str:
    """Header line with commander names (if any) and a timestamp."""
    timestamp = _format_timestamp(generated_at or _now())
    if diff.commanders:
        return f"{' / '.join(diff.commanders)} — Changelog ({timestamp})"
    return f"Deck Changelog ({timestamp})"


def _signed(delta: int) -> str:
    return f"+{delta}" if delta > 0 else str(delta)


def _printing_label(set_code: str, collector_number: str) -> str:
    if set_code and collector_number:
        return f"{set_code} #{collector_number}"
    return set_code or f"#{collector_number}"


def _printing_summary(change: PrintingChange) -> str:
    old = _printing_label(change.old_set_code, change.old_collector_number)
    new = _printing_label(change.new_set_code, change.new_collector_number)
    return f"{old} {ARROW} {new}"


def _format_section(title: str, section: DiffSection) -> str:
    if section.is_empty:
        return f"=== {title} ===\nNo changes.\n"

    text = f"=== {title} ===\n\n"

    if section.cards_in:
        text += "--- Cards In ---\n"
        for card in section.cards_in:
            text += f"+ {card.quantity} {card.name}\n"
        text += "\n"

    if section.cards_out:
        text += "--- Cards Out ---\n"
        for card in section.cards_out:
            text += f"- {card.quantity} {card.name}\n"
        text += "\n"

    if section.quantity_changes:
        text += "--- Quantity Changes ---\n"
        for change in section.quantity_changes:
            text += (
                f"~ {change.name} ({change.old_qty} {ARROW} {change.new_qty}, "
                f"{_signed(change.delta)})\n"
            )
        text += "\n"

    if section.printing_changes:
        text += "--- Printing Changes ---\n"
        for printing in section.printing_changes:
            text += f"~ {printing.quantity} {printing.name} ({_printing_summary(printing)})\n"
        text += "\n"

    return text


def format_changelog(diff: DiffResult, generated_at: datetime | None = None) -> str:
    """Plain-text changelog."""
    output = build_header(diff, generated_at) + "\n\n"
    output += _format_section("Mainboard", diff.mainboard)

    if diff.has_sideboard:
        output += "\n" + _format_section("Sideboard", diff.sideboard)

    return output.strip()


def _format_reddit_section(title: str, section: DiffSection) -> str:
    if section.is_empty:
        return ""

    text = f"### {title}\n\n"

    if section.cards_in:
        text += "**Cards In:**\n\n"
        for card in section.cards_in:
            text += f"- \\+ {card.quantity} [[{card.name}]]\n"
        text += "\n"

    if section.cards_out:
        text += "**Cards Out:**\n\n"
        for card in section.cards_out:
            text += f"- \\- {card.quantity} [[{card.name}]]\n"
        text += "\n"

    if section.quantity_changes:
        text += "**Quantity Changes:**\n\n"
        for change in section.quantity_changes:
            text += (
                f"- ~ [[{change.name}]] ({change.old_qty} {ARROW} {change.new_qty}, "
                f"{_signed(change.delta)})\n"
            )
        text += "\n"

    if section.printing_changes:
        text += "**Printing Changes:**\n\n"
        for printing in section.printing_changes:
            text += f"- ~ [[{printing.name}]] ({_printing_summary(printing)})\n"
        text += "\n"

    return text


def format_reddit(diff: DiffResult, generated_at: datetime | None = None) -> str:
    """Reddit-flavored markdown changelog."""
    output = f"## {build_header(diff, generated_at)}\n\n"
    output += _format_reddit_section("Mainboard", diff.mainboard)

    if diff.has_sideboard:
        output += _format_reddit_section("Sideboard", diff.sideboard)

    return output.strip()


def format_mpcfill(diff: DiffResult) -> str:
    """
    Cards that need new proxies, one "N Card Name" line each.

    Includes added cards and the positive delta of quantity increases.
    Printing swaps are not listed: a proxy is printed by name only.
    """
    lines: list[str] = []

    def add_section(section: DiffSection) -> None:
        for card in section.cards_in:
            lines.append(f"{card.quantity} {card.name}")
        for change in section.quantity_changes:
            if change.delta > 0:
                lines.append(f"{change.delta} {change.name}")

    add_section(diff.mainboard)
    if diff.has_sideboard:
        add_section(diff.sideboard)

    return "\n".join(lines)


def format_json(diff: DiffResult, generated_at: datetime | None = None) -> str:
    """Structured JSON export; the sideboard is omitted when neither deck had one."""
    moment = generated_at or _now()
    payload: dict[str, object] = {
        "commanders": list(diff.commanders),
        "timestamp": moment.isoformat(),
        "mainboard": diff.mainboard.to_dict(),
    }
    if diff.has_sideboard:
        payload["sideboard"] = diff.sideboard.to_dict()
    return json.dumps(payload, indent=2)


FORMATTERS: dict[str, Callable[[DiffResult], str]] = {
    "text": format_changelog,
    "reddit": format_reddit,
    "mpcfill": format_mpcfill,
    "json": format_json,
}


def render(diff: DiffResult, export_format: ExportFormat = "text") -> str:
    """Render a diff in the requested export format."""
    formatter = FORMATTERS.get(export_format)
    if formatter is None:
        raise ValueError(f"Unknown export format: {export_format}")
    return formatter(diff)
