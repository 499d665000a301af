"""In-memory room registry and connection index.

Nothing here is persisted: all rooms are lost when the process exits.
"""
import itertools
import logging
import threading
import uuid
from typing import Dict, Optional

from poker.models import Player, Room

logger = logging.getLogger(__name__)


class MembershipIndex:
    """Maps a connection id to the id of the room it is seated in."""

    def __init__(self):
        self._room_by_sid: Dict[str, str] = {}

    def seat(self, sid: str, room_id: str) -> None:
        self._room_by_sid[sid] = room_id

    def unseat(self, sid: str) -> Optional[str]:
        return self._room_by_sid.pop(sid, None)

    def room_id_of(self, sid: str) -> Optional[str]:
        return self._room_by_sid.get(sid)

    def __contains__(self, sid: str) -> bool:
        return sid in self._room_by_sid

    def __len__(self) -> int:
        return len(self._room_by_sid)


class RoomStore:
    """Owns every Room and keeps the MembershipIndex in step with seating.

    All seating changes go through ``add_player`` / ``remove_player`` so the
    index never disagrees with ``Room.players``. Handlers hold ``lock`` for
    the whole of an event.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self.index = MembershipIndex()
        self.lock = threading.RLock()
        self._join_seq = itertools.count(1)

    def create_room(self) -> str:
        room_id = str(uuid.uuid4())
        self._rooms[room_id] = Room(room_id)
        logger.info('[room-create] room=%s', room_id)
        return room_id

    def get_room(self, room_id) -> Optional[Room]:
        if not isinstance(room_id, str):
            return None
        return self._rooms.get(room_id)

    def room_exists(self, room_id) -> bool:
        return self.get_room(room_id) is not None

    def delete_room(self, room_id: str) -> None:
        room = self._rooms.pop(room_id, None)
        if room is None:
            return
        for sid in list(room.players):
            self.index.unseat(sid)
        logger.info('[room-delete] room=%s', room_id)

    def is_name_taken(self, room: Room, name: str) -> bool:
        return room.is_name_taken(name)

    def room_of(self, sid: str) -> Optional[Room]:
        room_id = self.index.room_id_of(sid)
        if room_id is None:
            return None
        return self._rooms.get(room_id)

    def add_player(self, room: Room, sid: str, name: str, role: str) -> Player:
        player = Player(id=sid, name=name, join_seq=next(self._join_seq), role=role)
        room.players[sid] = player
        self.index.seat(sid, room.id)
        return player

    def remove_player(self, room: Room, sid: str) -> Optional[Player]:
        """Unseat a player; deletes the room when it becomes empty."""
        player = room.players.pop(sid, None)
        self.index.unseat(sid)
        if not room.players:
            self.delete_room(room.id)
        return player

    def __len__(self) -> int:
        return len(self._rooms)
