"""Pure functions for parsing spoken expenses.

Speech input is dictated as "<amount> <free-form description>". The amount
region is any leading run of digits, commas, periods and whitespace, so
"1,250 rent" and "1 250 rent" both read as 1250.
"""

import re
from dataclasses import dataclass

from indospend.domain.models import Description, Money

TRANSCRIPT_PATTERN = re.compile(r"^([\d,.\s]*)(.*)$")
AMOUNT_TOKEN = re.compile(r"[\d,.]+")


@dataclass(frozen=True)
class SpokenExpense:
    """Immutable amount and description parsed from a transcript."""

    amount: Money
    description: Description


def parse_spoken_amount(text: str) -> Money:
    """Parse a spoken amount region into a number.

    Commas and whitespace are removed before parsing.

    Args:
        text: Leading amount region of a transcript.

    Returns:
        Parsed amount, or 0.0 if it is not a valid number.
    """
    cleaned = re.sub(r"[,\s]", "", text)
    try:
        return Money(float(cleaned))
    except ValueError:
        return Money(0.0)


def _split_fallback(transcript: str) -> SpokenExpense:
    # Multi-line transcripts: only the first word can be the amount.
    head, *rest = transcript.split(maxsplit=1)
    if AMOUNT_TOKEN.fullmatch(head) is None:
        return SpokenExpense(amount=Money(0.0), description=Description(transcript.strip()))
    return SpokenExpense(amount=parse_spoken_amount(head), description=Description(" ".join(rest).strip()))


def parse_transcript(transcript: str) -> SpokenExpense:
    """Split a transcript into a leading amount and a trailing description.

    Args:
        transcript: Full speech-to-text output.

    Returns:
        SpokenExpense. A transcript without a leading number yields 0.0 and
        the whole (trimmed) transcript as description.
    """
    match = TRANSCRIPT_PATTERN.match(transcript)
    if match is None:
        return _split_fallback(transcript)

    amount = parse_spoken_amount(match.group(1))
    description = Description(match.group(2).strip())
    return SpokenExpense(amount=amount, description=description)
