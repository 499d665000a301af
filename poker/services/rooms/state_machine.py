from typing import NamedTuple, Optional

from poker.exceptions import Conflict, InvalidInput, NotFound, Unauthorized
from poker.models import NOT_VOTED, Player, PlayerRole, Room, RoomStatus
from poker.store import RoomStore
from .guard import rename_target, require_admin


class Departure(NamedTuple):
    room: Room
    player: Player
    room_deleted: bool
    promoted: Optional[Player] = None


def is_vote(value) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    return isinstance(value, (str, int, float)) and bool(value)


class RoomStateMachine:
    """Applies inbound room events to the store.

    Every method validates before it mutates: a raised PokerError leaves
    the store untouched. Methods that may legitimately do nothing return
    ``None``; otherwise they return the room whose snapshot must be
    published.
    """

    def __init__(self, store: RoomStore, default_player_name: str = 'guest'):
        self.store = store
        self.default_player_name = default_player_name

    def join(self, sid: str, room_id, player_name) -> Room:
        if not isinstance(room_id, str) or not room_id:
            raise InvalidInput('roomId is required')
        if sid in self.store.index:
            raise Conflict('Already in a room')
        room = self.store.get_room(room_id)
        if room is None:
            raise NotFound('Room not found')
        if player_name is None:
            player_name = self.default_player_name
        if not isinstance(player_name, str) or not player_name.strip():
            raise InvalidInput('playerName is required')
        name = player_name.strip()
        if self.store.is_name_taken(room, name):
            raise Conflict()
        role = PlayerRole.ADMIN if not room.players else PlayerRole.COMMON
        self.store.add_player(room, sid, name, role)
        return room

    def leave(self, sid: str) -> Optional[Departure]:
        room = self.store.room_of(sid)
        if room is None:
            return None
        player = self.store.remove_player(room, sid)
        if not room.players:
            return Departure(room, player, room_deleted=True)
        promoted = None
        if player.is_admin:
            promoted = room.ordered_players()[0]
            promoted.role = PlayerRole.ADMIN
        return Departure(room, player, room_deleted=False, promoted=promoted)

    def kick(self, sid: str, target_id) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None:
            return None
        require_admin(room, sid)
        if target_id == sid:
            raise Unauthorized()
        if target_id not in room.players:
            raise NotFound('Player not found')
        self.store.remove_player(room, target_id)
        return room

    def change_name(self, sid: str, target_id, new_name) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None:
            return None
        target = rename_target(room, sid, target_id)
        if target is None or not isinstance(new_name, str):
            return None
        name = new_name.strip()
        if not name or name == target.name:
            return None
        if room.is_name_taken(name, exclude_id=target.id):
            raise Conflict()
        target.name = name
        return room

    def update_voting_status(self, sid: str, target_id, can_vote) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None:
            return None
        require_admin(room, sid)
        if not isinstance(can_vote, bool):
            raise InvalidInput('canVote is required')
        target = room.players.get(target_id)
        if target is None:
            raise NotFound('Player not found')
        target.can_vote = can_vote
        if not room.is_revealed:
            target.clear_choice()
        return room

    def transfer_admin(self, sid: str, target_id) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None or not target_id:
            return None
        old_admin = require_admin(room, sid)
        new_admin = room.players.get(target_id)
        if new_admin is None or new_admin is old_admin:
            return None
        old_admin.role, new_admin.role = PlayerRole.COMMON, PlayerRole.ADMIN
        return room

    def choose_card(self, sid: str, choice) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None or not is_vote(choice) or room.is_revealed:
            return None
        player = room.players[sid]
        if not player.can_vote or player.choice == choice:
            return None
        player.choice = choice
        return room

    def admin_change_player_choice(self, sid: str, target_id, choice) -> Optional[Room]:
        room = self.store.room_of(sid)
        if room is None:
            return None
        require_admin(room, sid)
        if not room.is_revealed:
            return None
        target = room.players.get(target_id)
        if target is None:
            raise NotFound('Player not found')
        if not is_vote(choice) or target.choice == choice:
            return None
        target.previous_choice_before_admin_change = target.choice
        target.choice = choice
        return room

    def _moderated_room(self, sid: str, room_id) -> Room:
        room = self.store.get_room(room_id)
        if room is None:
            raise NotFound('Room not found')
        require_admin(room, sid)
        return room

    def reset(self, sid: str, room_id) -> Room:
        room = self._moderated_room(sid, room_id)
        for player in room.players.values():
            player.clear_choice()
            player.previous_choice_before_admin_change = NOT_VOTED
        room.status = RoomStatus.VOTING
        return room

    def reveal(self, sid: str, room_id) -> Room:
        room = self._moderated_room(sid, room_id)
        room.status = RoomStatus.REVEAL
        return room
