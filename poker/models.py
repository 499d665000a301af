from typing import Dict, List, Optional

# Sentinel stored in Player.choice until a vote is cast
NOT_VOTED = False


class RoomStatus:
    VOTING = 'VOTING'
    REVEAL = 'REVEAL'


class PlayerRole:
    ADMIN = 'ADMIN'
    COMMON = 'COMMON'


def has_choice(value) -> bool:
    return value is not NOT_VOTED and value is not None and value != ''


class Player:
    """A participant seated in a room, identified by its connection id."""

    def __init__(self, id: str, name: str, join_seq: int, role: str = PlayerRole.COMMON):
        self.id = id
        self.name = name
        self.join_seq = join_seq
        self.role = role
        self.can_vote = True
        self.choice = NOT_VOTED
        self.previous_choice_before_admin_change = NOT_VOTED

    @property
    def is_admin(self) -> bool:
        return self.role == PlayerRole.ADMIN

    @property
    def has_voted(self) -> bool:
        return has_choice(self.choice)

    def clear_choice(self) -> None:
        self.choice = NOT_VOTED

    def __repr__(self):
        return f'<Player {self.id} {self.name!r} {self.role}>'


class Room:
    """A voting session. Owns its players, keyed by connection id."""

    def __init__(self, id: str):
        self.id = id
        self.status = RoomStatus.VOTING
        self.players: Dict[str, Player] = {}

    @property
    def is_revealed(self) -> bool:
        return self.status == RoomStatus.REVEAL

    def ordered_players(self) -> List[Player]:
        """Players in join order."""
        return sorted(self.players.values(), key=lambda p: p.join_seq)

    def is_name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        # Exact, case-sensitive match
        return any(p.name == name and p.id != exclude_id for p in self.players.values())

    def __repr__(self):
        return f'<Room {self.id} {self.status} players={len(self.players)}>'
