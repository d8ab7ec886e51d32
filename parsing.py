import logging
import re
from typing import Callable, List, Tuple

from models.bet import Bet, pad_number, reverse_number

logger = logging.getLogger("parsing")

SEGMENT_SPLIT = re.compile(r"\n|,")
WHITESPACE = re.compile(r"\s+")


def _single(m: re.Match) -> List[Bet]:
    return [Bet(number=pad_number(m.group(1)), amount=int(m.group(2)))]


def _with_reverse(m: re.Match) -> List[Bet]:
    number = pad_number(m.group(1))
    amount = int(m.group(2))
    return [Bet(number=number, amount=amount), Bet(number=reverse_number(number), amount=amount)]


# Evaluated in order, first match wins.
# The delimiter of the first rule is optional, so "22500" reads as 22 / 500.
BET_GRAMMAR: List[Tuple[str, re.Pattern, Callable[[re.Match], List[Bet]]]] = [
    ("delimited", re.compile(r"^(\d{1,2})\s*[-_dD]?\s*(\d+)$", re.ASCII), _single),
    ("reverse", re.compile(r"^(\d{1,2})\s*[rR]\s*(\d+)$", re.ASCII), _with_reverse),
    ("equals", re.compile(r"^(\d{1,2})\s*=\s*(\d+)$", re.ASCII), _single),
    ("spaced", re.compile(r"^(\d{1,2})\s+(\d+)$", re.ASCII), _single),
]


def _split_segments(text: str) -> List[str]:
    parts = [s.strip() for s in SEGMENT_SPLIT.split(text)]
    return [WHITESPACE.sub(" ", s) for s in parts if s]


def parse_segment(segment: str) -> List[Bet]:
    for name, pattern, extract in BET_GRAMMAR:
        m = pattern.match(segment)
        if m:
            logger.debug(f"Segment {segment!r} matched rule {name}")
            try:
                return extract(m)
            except ValueError as e:
                # e.g. an amount too long for int()
                logger.debug(f"Dropping segment {segment[:40]!r}...: {e}")
                return []
    return []


def parse_message_to_bets(text: str) -> List[Bet]:
    """Extract bets from a chat message.

    The message is split on newlines and commas; each fragment is matched
    against BET_GRAMMAR. Fragments that match nothing are dropped, so one bad
    line never blocks the others.
    """
    if not text:
        return []

    bets: List[Bet] = []
    for segment in _split_segments(text):
        bets.extend(parse_segment(segment))
    return bets
