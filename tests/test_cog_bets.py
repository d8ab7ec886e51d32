import asyncio
from types import SimpleNamespace

import cogs.bets as bets_cog
from cogs.bets import BetsCog, split_message
from config import Config
from services.bet_service import SUMMARY_ERROR_MESSAGE


class FakeChannel:
    def __init__(self, channel_id=1):
        self.id = channel_id
        self.sent = []

    async def send(self, text):
        self.sent.append(text)


def _cog(**overrides) -> BetsCog:
    config = Config(bot_token="", **overrides)
    return BetsCog(SimpleNamespace(config=config))


def _message(content, bot=False, channel=None):
    author = SimpleNamespace(bot=bot, name="ann", global_name=None, id=7)
    return SimpleNamespace(content=content, author=author, channel=channel or FakeChannel())


def _capture_recorded(monkeypatch):
    calls = []

    async def fake_record(text, sender, chat_id, config):
        calls.append((text, sender, chat_id))
        return []

    monkeypatch.setattr(bets_cog, "record_message", fake_record)
    return calls


def test_short_reply_is_one_chunk():
    assert split_message("a\nb") == ["a\nb"]


def test_long_reply_splits_on_lines():
    lines = [f"{n:02d} - {'9' * 40}" for n in range(100)]
    chunks = split_message("\n".join(lines), limit=500)
    assert len(chunks) > 1
    assert all(len(c) <= 500 for c in chunks)
    assert "\n".join(chunks).split("\n") == lines


def test_overlong_line_is_cut():
    chunks = split_message("x" * 25, limit=10)
    assert all(len(c) <= 10 for c in chunks)
    assert "".join(chunks) == "x" * 25


def test_bot_messages_are_not_parsed():
    cog = _cog()
    assert cog._should_parse(_message("22-500")) is True
    assert cog._should_parse(_message("22-500", bot=True)) is False


def test_only_configured_channel_is_read():
    cog = _cog(channel_id=5)
    assert cog._should_parse(_message("22-500", channel=FakeChannel(5))) is True
    assert cog._should_parse(_message("22-500", channel=FakeChannel(6))) is False


def test_commands_are_not_parsed_as_bets():
    cog = _cog()
    assert cog._should_parse(_message("!summarize peruser")) is False


def test_saved_bets_are_confirmed(monkeypatch):
    async def fake_record(text, sender, chat_id, config):
        return [SimpleNamespace(number="22", amount=500)]

    monkeypatch.setattr(bets_cog, "record_message", fake_record)
    channel = FakeChannel()
    asyncio.run(_cog().on_message(_message("22-500", channel=channel)))
    assert channel.sent == ["✅ Saved:\n22 - 500"]


def test_edit_with_new_text_is_recorded(monkeypatch):
    calls = _capture_recorded(monkeypatch)
    asyncio.run(_cog().on_message_edit(_message("22-500"), _message("22-600")))
    assert calls == [("22-600", "ann", 1)]


def test_unchanged_edit_is_not_recorded_again(monkeypatch):
    calls = _capture_recorded(monkeypatch)
    asyncio.run(_cog().on_message_edit(_message("22-500"), _message("22-500")))
    assert calls == []


def test_edits_ignored_when_disabled(monkeypatch):
    calls = _capture_recorded(monkeypatch)
    asyncio.run(_cog(record_edits=False).on_message_edit(_message("22-500"), _message("22-600")))
    assert calls == []


def test_summarize_storage_failure_replies_with_error(monkeypatch):
    async def failing_summary(chat_id, flags, config):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(bets_cog, "summarize_chat", failing_summary)
    cog = _cog()
    ctx = SimpleNamespace(channel=FakeChannel())
    asyncio.run(BetsCog.summarize.callback(cog, ctx))
    assert ctx.channel.sent == [SUMMARY_ERROR_MESSAGE]


def test_summarize_passes_flags(monkeypatch):
    seen = []

    async def fake_summary(chat_id, flags, config):
        seen.append((chat_id, flags.per_user, flags.before_noon))
        return "report"

    monkeypatch.setattr(bets_cog, "summarize_chat", fake_summary)
    cog = _cog()
    ctx = SimpleNamespace(channel=FakeChannel(3))
    asyncio.run(BetsCog.summarize.callback(cog, ctx, "peruser"))
    assert seen == [(3, True, False)]
    assert ctx.channel.sent == ["report"]
