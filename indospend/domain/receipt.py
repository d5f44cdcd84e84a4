"""Pure functions for pulling an expense out of receipt OCR output.

The camera/OCR collaborator hands over recognized text lines with their
bounding boxes. This module picks a title and a total from them:
- No I/O operations
- Never raises on malformed text (missing amounts degrade to 0.0)
"""

import re
from dataclasses import dataclass
from typing import Any

from indospend.domain.models import Money

UNKNOWN_TITLE = "Unknown Title"

TOTAL_KEYWORD = "total"

# Digits, optionally followed by a decimal point and 1-2 digits
AMOUNT_PATTERN = re.compile(r"\d+(?:\.\d{1,2})?")


@dataclass(frozen=True)
class RecognizedLine:
    """Immutable OCR text line with its bounding box geometry."""

    text: str
    y: float = 0.0
    height: float = 0.0
    confidence: float = 1.0

    @property
    def top(self) -> float:
        """Vertical position used for title selection (y + height)."""
        return self.y + self.height


@dataclass(frozen=True)
class ReceiptScan:
    """Immutable result of scanning a receipt."""

    amount: Money
    title: str


def select_title(lines: list[RecognizedLine]) -> str:
    """Pick the receipt title: the line with the greatest y + height.

    Args:
        lines: Recognized lines in OCR order.

    Returns:
        Text of the topmost line, or "Unknown Title" if there are no lines.
    """
    if not lines:
        return UNKNOWN_TITLE

    best = lines[0]
    for line in lines[1:]:
        if line.top > best.top:
            best = line
    return best.text


def extract_line_amount(text: str) -> Money | None:
    """Extract the last number-like token from a line of text.

    Args:
        text: A single recognized line.

    Returns:
        The last matching amount, or None if the line has no digits.
    """
    matches = AMOUNT_PATTERN.findall(text)
    if not matches:
        return None

    try:
        return Money(float(matches[-1]))
    except ValueError:
        return None


def extract_total(lines: list[RecognizedLine]) -> Money:
    """Find the receipt total.

    Only the first line mentioning "total" (case-insensitive) is examined;
    a later "total" line is ignored even if the first one has no number.

    Args:
        lines: Recognized lines in OCR order.

    Returns:
        The total amount, or 0.0 if none was found.
    """
    for line in lines:
        if TOTAL_KEYWORD in line.text.lower():
            amount = extract_line_amount(line.text)
            return amount if amount is not None else Money(0.0)

    return Money(0.0)


def scan_receipt(lines: list[RecognizedLine]) -> ReceiptScan:
    """Turn recognized receipt lines into an amount and a title.

    Args:
        lines: Recognized lines in OCR order.

    Returns:
        ReceiptScan with the total (0.0 if absent) and the title.
    """
    return ReceiptScan(amount=extract_total(lines), title=select_title(lines))


def _best_candidate(candidates: list[Any]) -> tuple[str, float] | None:
    best: tuple[str, float] | None = None
    for candidate in candidates:
        if isinstance(candidate, str):
            text, confidence = candidate, 1.0
        elif isinstance(candidate, dict) and candidate.get("text"):
            text = str(candidate["text"])
            confidence = _to_float(candidate.get("confidence"), 1.0)
        else:
            continue
        if best is None or confidence > best[1]:
            best = (text, confidence)
    return best


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_ocr_payload(raw_lines: list[Any]) -> list[RecognizedLine]:
    """Parse OCR output (as loaded from JSON) into recognized lines.

    Each entry is an object with either a "text" string or a list of ranked
    "candidates" ({"text", "confidence"}), plus geometry either in a "box"
    object or at the top level ("y", "height").

    Args:
        raw_lines: Decoded JSON list.

    Returns:
        Recognized lines in the original order. Entries without text are skipped.
    """
    lines: list[RecognizedLine] = []

    for entry in raw_lines:
        if isinstance(entry, str):
            lines.append(RecognizedLine(text=entry))
            continue
        if not isinstance(entry, dict):
            continue

        candidates = entry.get("candidates")
        if isinstance(candidates, list):
            best = _best_candidate(candidates)
            if best is None:
                continue
            text, confidence = best
        elif entry.get("text"):
            text = str(entry["text"])
            confidence = _to_float(entry.get("confidence"), 1.0)
        else:
            continue

        box = entry.get("box") if isinstance(entry.get("box"), dict) else entry
        lines.append(
            RecognizedLine(
                text=text,
                y=_to_float(box.get("y")),
                height=_to_float(box.get("height")),
                confidence=confidence,
            )
        )

    return lines
