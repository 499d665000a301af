from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from poker.models import Player, Room, RoomStatus, has_choice
from .stats import Number, compute_stats


@dataclass(frozen=True)
class PlayerView:
    id: str
    name: str
    can_vote: bool
    # Literal vote once revealed; otherwise only whether a vote exists
    choice: Union[bool, str, Number]
    role: str
    previous_choice: Optional[Union[str, Number]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'canVote': self.can_vote,
            'choice': self.choice,
            'role': self.role,
        }
        if self.previous_choice is not None:
            data['previousChoiceBeforeAdminChange'] = self.previous_choice
        return data


@dataclass(frozen=True)
class RoomSnapshot:
    """Sanitized, wire-ready view of a room."""
    id: str
    status: str
    players: Tuple[PlayerView, ...]
    voted_players_count: int
    voting_players_count: int
    min_choice: Optional[Number] = None
    max_choice: Optional[Number] = None
    average_choice: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'status': self.status,
            'players': [p.to_dict() for p in self.players],
            'votedPlayersCount': self.voted_players_count,
            'votingPlayersCount': self.voting_players_count,
        }
        if self.status == RoomStatus.REVEAL:
            data['minChoice'] = self.min_choice
            data['maxChoice'] = self.max_choice
            data['averageChoice'] = self.average_choice
        return data


def _player_view(player: Player, revealed: bool) -> PlayerView:
    if revealed:
        previous = player.previous_choice_before_admin_change
        return PlayerView(
            id=player.id,
            name=player.name,
            can_vote=player.can_vote,
            choice=player.choice,
            role=player.role,
            previous_choice=previous if has_choice(previous) else None,
        )
    return PlayerView(
        id=player.id,
        name=player.name,
        can_vote=player.can_vote,
        choice=player.has_voted,
        role=player.role,
    )


def build_snapshot(room: Room) -> RoomSnapshot:
    revealed = room.is_revealed
    players = room.ordered_players()
    eligible = [p for p in players if p.can_vote]
    voted = sum(1 for p in eligible if p.has_voted)
    stats = compute_stats(players) if revealed else None
    return RoomSnapshot(
        id=room.id,
        status=room.status,
        players=tuple(_player_view(p, revealed) for p in players),
        voted_players_count=voted,
        voting_players_count=len(eligible) - voted,
        min_choice=stats.min_choice if stats else None,
        max_choice=stats.max_choice if stats else None,
        average_choice=stats.average_choice if stats else None,
    )
