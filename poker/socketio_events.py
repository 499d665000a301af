from functools import wraps

from flask import current_app, request

from poker import socketio
from poker.broadcast import BroadcastAdapter
from poker.exceptions import InvalidInput, PokerError
from poker.services.rooms.state_machine import RoomStateMachine
from poker.store import RoomStore


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _store() -> RoomStore:
    return current_app.extensions['poker_store']


def _machine() -> RoomStateMachine:
    return current_app.extensions['poker_machine']


def _broadcaster() -> BroadcastAdapter:
    return current_app.extensions['poker_broadcast']


def _fields(data, *names):
    if not isinstance(data, dict):
        raise InvalidInput('Invalid payload')
    return [data.get(name) for name in names]


def _as_id(value):
    return value if isinstance(value, str) else None


def room_event(tag: str):
    """Run a handler as one atomic step and report domain errors privately.

    The store lock is held from room lookup to the last emit, so no other
    event can observe or change the room in between.
    """
    def decorator(handler):
        @wraps(handler)
        def wrapper(*args):
            with _store().lock:
                try:
                    return handler(*args)
                except PokerError as exc:
                    sid = _get_sid()
                    current_app.logger.info(f"[{tag}-rejected] sid={sid} error={exc.message!r}")
                    _broadcaster().send_error(sid, exc.message)
        return wrapper
    return decorator


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


@room_event('disconnect')
def handle_disconnect(reason=None):
    sid = _get_sid()
    departure = _machine().leave(sid)
    if departure is None:
        return
    room = departure.room
    if departure.room_deleted:
        current_app.logger.info(f"[disconnect] sid={sid} room={room.id} last player left, room deleted")
        return
    current_app.logger.info(f"[disconnect] sid={sid} room={room.id} players={len(room.players)}")
    broadcaster = _broadcaster()
    if departure.promoted is not None:
        current_app.logger.info(f"[admin-succession] room={room.id} new_admin={departure.promoted.id}")
        broadcaster.admin_disconnected(room.id)
    broadcaster.publish_room(room)


@room_event('join')
def handle_join_room(data=None):
    room_id, player_name = _fields(data, 'roomId', 'playerName')
    sid = _get_sid()
    room = _machine().join(sid, room_id, player_name)
    player = room.players[sid]
    current_app.logger.info(f"[join] sid={sid} room={room.id} name={player.name!r} role={player.role}")
    broadcaster = _broadcaster()
    broadcaster.subscribe(sid, room.id)
    broadcaster.publish_room(room)


@room_event('kick')
def handle_kick_player(target_id=None):
    target_id = _as_id(target_id)
    room = _machine().kick(_get_sid(), target_id)
    if room is None:
        return
    current_app.logger.info(f"[kick] room={room.id} target={target_id}")
    broadcaster = _broadcaster()
    broadcaster.unsubscribe(target_id, room.id)
    broadcaster.player_kicked(room.id, target_id)
    broadcaster.publish_room(room)


@room_event('change-name')
def handle_change_name(data=None):
    target_id, new_name = _fields(data, 'targetId', 'newName')
    room = _machine().change_name(_get_sid(), _as_id(target_id), new_name)
    if room is not None:
        _broadcaster().publish_room(room)


@room_event('voting-status')
def handle_update_voting_status(data=None):
    target_id, can_vote = _fields(data, 'targetId', 'canVote')
    room = _machine().update_voting_status(_get_sid(), _as_id(target_id), can_vote)
    if room is not None:
        _broadcaster().publish_room(room)


@room_event('transfer-admin')
def handle_transfer_admin(target_id=None):
    sid = _get_sid()
    room = _machine().transfer_admin(sid, _as_id(target_id))
    if room is None:
        return
    current_app.logger.info(f"[transfer-admin] room={room.id} from={sid} to={target_id}")
    _broadcaster().publish_room(room)


@room_event('choose-card')
def handle_choose_card(choice=None):
    room = _machine().choose_card(_get_sid(), choice)
    if room is not None:
        _broadcaster().publish_room(room)


@room_event('admin-change-choice')
def handle_admin_change_player_choice(data=None):
    target_id, choice = _fields(data, 'targetId', 'choice')
    room = _machine().admin_change_player_choice(_get_sid(), _as_id(target_id), choice)
    if room is None:
        return
    current_app.logger.info(f"[admin-change-choice] room={room.id} target={target_id}")
    _broadcaster().publish_room(room)


@room_event('reset')
def handle_reset(room_id=None):
    room = _machine().reset(_get_sid(), room_id)
    current_app.logger.info(f"[reset] room={room.id}")
    _broadcaster().publish_room(room)


@room_event('reveal')
def handle_reveal_cards(room_id=None):
    room = _machine().reveal(_get_sid(), room_id)
    current_app.logger.info(f"[reveal] room={room.id}")
    _broadcaster().publish_room(room)


EVENT_HANDLERS = (
    ('connect', handle_connect),
    ('disconnect', handle_disconnect),
    ('joinRoom', handle_join_room),
    ('kickPlayer', handle_kick_player),
    ('changeName', handle_change_name),
    ('updateVotingStatus', handle_update_voting_status),
    ('transferAdmin', handle_transfer_admin),
    ('chooseCard', handle_choose_card),
    ('adminChangePlayerChoice', handle_admin_change_player_choice),
    ('reset', handle_reset),
    ('revealCards', handle_reveal_cards),
)


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register the room event handlers on ``namespace``."""
    for message, handler in EVENT_HANDLERS:
        socketio.on_event(message, handler, namespace=namespace)
