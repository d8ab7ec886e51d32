import logging
from dataclasses import dataclass
from typing import Dict, Iterable

from rapidfuzz import fuzz, process

logger = logging.getLogger("summary_flags")

FLAG_ALIASES: Dict[str, str] = {
    "peruser": "per_user",
    "before12": "before_noon",
    "before-12": "before_noon",
}


@dataclass
class SummaryFlags:
    per_user: bool = False
    before_noon: bool = False


def _match_flag(token: str, threshold: float):
    if token in FLAG_ALIASES:
        return FLAG_ALIASES[token]
    match = process.extractOne(token, list(FLAG_ALIASES), scorer=fuzz.ratio, score_cutoff=threshold)
    if match:
        logger.debug(f"Fuzzy matched flag {token!r} to {match[0]!r} ({match[1]:.0f})")
        return FLAG_ALIASES[match[0]]
    return None


def parse_summary_flags(tokens: Iterable[str], threshold: float = 85.0) -> SummaryFlags:
    flags = SummaryFlags()
    for token in tokens:
        name = _match_flag(token.strip().lower(), threshold)
        if name:
            setattr(flags, name, True)
    return flags
