import logging
from typing import List

from aggregation import NO_DATA_MESSAGE, filter_before_noon, summarize
from config import Config
from db import get_bets_for_chat, insert_bets
from models.bet import BetRecord
from parsing import parse_message_to_bets
from services.summary_flags import SummaryFlags

logger = logging.getLogger("bet_service")

SUMMARY_ERROR_MESSAGE = "❌ Error while summarizing. See server logs."


async def record_message(text: str, sender: str, chat_id, config: Config) -> List[BetRecord]:
    """Parse a chat message and store every bet in it. Returns the stored records."""
    bets = parse_message_to_bets(text)
    if not bets:
        return []
    records = await insert_bets(bets, sender, chat_id, path=config.db_path)
    logger.info(f"Saved {len(records)} bets from {sender} in chat {chat_id}.")
    return records


def format_saved_reply(records: List[BetRecord]) -> str:
    return "✅ Saved:\n" + "\n".join(f"{r.number} - {r.amount}" for r in records)


async def summarize_chat(chat_id, flags: SummaryFlags, config: Config) -> str:
    records = await get_bets_for_chat(chat_id, path=config.db_path)
    if flags.before_noon:
        records = filter_before_noon(records, config.local_utc_offset_minutes, config.cutoff_hour)
    report = summarize(records, per_user=flags.per_user)
    return report if report is not None else NO_DATA_MESSAGE
