from typing import Optional


def resolve_sender(
    username: Optional[str],
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    user_id=None,
) -> str:
    """Display name for a bettor: username, else full name, else id_<user_id>."""
    if username:
        return username
    full_name = f"{first_name or ''} {last_name or ''}".strip()
    if full_name:
        return full_name
    return f"id_{user_id}"
