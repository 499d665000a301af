from typing import Optional

from poker.exceptions import Unauthorized
from poker.models import Player, Room


def require_admin(room: Room, actor_id: str) -> Player:
    """Return the acting player if it moderates ``room``, else raise."""
    actor = room.players.get(actor_id)
    if actor is None or not actor.is_admin:
        raise Unauthorized()
    return actor


def rename_target(room: Room, actor_id: str, target_id: Optional[str]) -> Optional[Player]:
    """Players may rename themselves; the moderator may rename anyone."""
    actor = room.players.get(actor_id)
    if actor is None:
        return None
    if target_id is None or target_id == actor_id:
        return actor
    if not actor.is_admin:
        return None
    return room.players.get(target_id)
