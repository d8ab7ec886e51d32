import os
from dataclasses import dataclass


@dataclass
class Config:
    # Discord
    bot_token: str
    channel_id: int = 0
    command_prefix: str = "!"

    # Storage
    db_path: str = "bets.db"

    # Summaries
    local_utc_offset_minutes: int = 390
    cutoff_hour: int = 12
    flag_match_threshold: float = 85.0

    # Intake
    record_edits: bool = True

    # Debug
    debug_logging: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        token = os.environ.get("BOT_TOKEN", "")
        channel_id = int(os.environ.get("CHANNEL_ID", "0"))
        return cls(
            bot_token=token,
            channel_id=channel_id,
            command_prefix=os.environ.get("COMMAND_PREFIX", "!"),
            db_path=os.environ.get("DB_PATH", "bets.db"),
            local_utc_offset_minutes=int(os.environ.get("LOCAL_UTC_OFFSET_MIN", "390")),
            cutoff_hour=int(os.environ.get("CUTOFF_HOUR", "12")),
            flag_match_threshold=float(os.environ.get("FLAG_MATCH_THRESHOLD", "85")),
            record_edits=os.environ.get("RECORD_EDITS", "true").lower() == "true",
            debug_logging=os.environ.get("DEBUG_LOGGING", "false").lower() == "true",
        )
