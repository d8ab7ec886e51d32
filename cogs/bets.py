import logging
from typing import List

import discord
from discord.ext import commands

from services.bet_service import SUMMARY_ERROR_MESSAGE, format_saved_reply, record_message, summarize_chat
from services.identity import resolve_sender
from services.summary_flags import parse_summary_flags

logger = logging.getLogger("cogs.bets")

DISCORD_MESSAGE_LIMIT = 2000


def split_message(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> List[str]:
    """Split a reply on line boundaries so each chunk fits in one message."""
    paginator = commands.Paginator(prefix=None, suffix=None, max_size=limit)
    # Paginator reserves two characters of each page for line separators
    width = limit - 2
    for line in text.split("\n"):
        while len(line) > width:
            paginator.add_line(line[:width])
            line = line[width:]
        paginator.add_line(line)
    return paginator.pages


def sender_for(author: discord.abc.User) -> str:
    return resolve_sender(author.name, getattr(author, "global_name", None), None, author.id)


class BetsCog(commands.Cog, name="Bets"):
    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.config = bot.config

    def _should_parse(self, message: discord.Message) -> bool:
        if message.author.bot:
            return False
        if self.config.channel_id and message.channel.id != self.config.channel_id:
            return False
        return not message.content.startswith(self.config.command_prefix)

    async def _send(self, channel: discord.abc.Messageable, text: str):
        for chunk in split_message(text):
            await channel.send(chunk)

    async def _record(self, message: discord.Message):
        if not self._should_parse(message):
            return
        sender = sender_for(message.author)
        try:
            records = await record_message(message.content, sender, message.channel.id, self.config)
        except Exception as e:
            logger.exception(f"Failed to save bets from {sender}: {e}")
            return
        if records:
            await self._send(message.channel, format_saved_reply(records))

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        await self._record(message)

    @commands.Cog.listener()
    async def on_message_edit(self, before: discord.Message, after: discord.Message):
        if not self.config.record_edits or before.content == after.content:
            return
        await self._record(after)

    @commands.command(name="summarize")
    async def summarize(self, ctx: commands.Context, *tokens: str):
        """Totals per number. Flags: peruser, before12."""
        flags = parse_summary_flags(tokens, self.config.flag_match_threshold)
        try:
            reply = await summarize_chat(ctx.channel.id, flags, self.config)
        except Exception as e:
            logger.exception(f"summarize error: {e}")
            reply = SUMMARY_ERROR_MESSAGE
        await self._send(ctx.channel, reply)
