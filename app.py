import asyncio
import logging

import discord
from discord.ext import commands

from config import Config
from db import init_db
from cogs.bets import BetsCog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)
logger = logging.getLogger("BetTracker")


def create_bot(config: Config) -> commands.Bot:
    intents = discord.Intents.default()
    intents.message_content = True
    bot = commands.Bot(command_prefix=config.command_prefix, intents=intents)
    bot.config = config
    return bot


async def main():
    config = Config.from_env()
    if config.debug_logging:
        logging.getLogger().setLevel(logging.DEBUG)
    if not config.bot_token:
        raise SystemExit("Missing BOT_TOKEN")

    await init_db(config.db_path)
    bot = create_bot(config)

    @bot.event
    async def on_ready():
        logger.info(f"Logged in as {bot.user} (ID: {bot.user.id})")

    await bot.add_cog(BetsCog(bot))
    await bot.start(config.bot_token)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
