from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Bet:
    number: str
    amount: int

    def __post_init__(self):
        if len(self.number) != 2 or not self.number.isdigit():
            raise ValueError(f"Bet number must be two digits, got {self.number!r}")
        if self.amount < 0:
            raise ValueError(f"Bet amount must be non-negative, got {self.amount}")


@dataclass(frozen=True)
class BetRecord:
    """A stored bet. `amount` is kept as read from storage and may not be numeric."""
    number: str
    amount: Any
    sender: str
    chat_id: str
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BetRecord":
        return cls(
            number=row["number"],
            amount=row["amount"],
            sender=row["sender"],
            chat_id=str(row["chat_id"]),
            created_at=row.get("created_at"),
        )


def pad_number(raw: str) -> str:
    return raw if len(raw) == 2 else "0" + raw


def reverse_number(number: str) -> str:
    # "15" -> "51", "05" -> "50"
    return number.zfill(2)[::-1]
