import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import aiosqlite

from models.bet import Bet, BetRecord

logger = logging.getLogger("db")

DB_PATH = "bets.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS bets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    number TEXT NOT NULL,
    amount INTEGER NOT NULL,
    sender TEXT,
    chat_id TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_bets_chat_id ON bets (chat_id);
"""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def init_db(path: str = DB_PATH):
    async with aiosqlite.connect(path) as db:
        await db.executescript(SCHEMA)
        await db.commit()
    logger.info("Database initialized.")


async def insert_bets(
    bets: Sequence[Bet],
    sender: str,
    chat_id,
    path: str = DB_PATH,
    created_at: Optional[str] = None,
) -> List[BetRecord]:
    created_at = created_at or utc_now_iso()
    records = [
        BetRecord(number=b.number, amount=b.amount, sender=sender, chat_id=str(chat_id), created_at=created_at)
        for b in bets
    ]
    async with aiosqlite.connect(path) as db:
        await db.executemany(
            "INSERT INTO bets (number, amount, sender, chat_id, created_at) VALUES (?,?,?,?,?)",
            [(r.number, r.amount, r.sender, r.chat_id, r.created_at) for r in records],
        )
        await db.commit()
    logger.debug(f"Inserted {len(records)} bets for {sender} in chat {chat_id}.")
    return records


async def get_bets_for_chat(chat_id, path: str = DB_PATH) -> List[BetRecord]:
    async with aiosqlite.connect(path) as db:
        db.row_factory = aiosqlite.Row
        cursor = await db.execute(
            "SELECT number, amount, sender, chat_id, created_at FROM bets WHERE chat_id=? ORDER BY id",
            (str(chat_id),),
        )
        rows = await cursor.fetchall()
    return [BetRecord.from_row(dict(r)) for r in rows]
