from flask import Blueprint, current_app, jsonify

from poker.exceptions import Conflict, NotFound

rooms = Blueprint('rooms', __name__)


def _store():
    return current_app.extensions['poker_store']


@rooms.route('/create', methods=['POST'])
def create_room():
    store = _store()
    with store.lock:
        room_id = store.create_room()
    current_app.logger.info(f"[create] room={room_id}")
    return jsonify({'message': 'Room created', 'roomId': room_id}), 201


@rooms.route('/<string:room_id>', methods=['GET'])
def room_exists(room_id):
    if not _store().room_exists(room_id):
        raise NotFound('Room not found.')
    return jsonify({'message': 'Room exists', 'roomId': room_id})


@rooms.route('/<string:room_id>/player/<string:player_name>', methods=['GET'])
def check_player_name(room_id, player_name):
    """Tell a client, before it joins, whether a name is still free."""
    store = _store()
    with store.lock:
        room = store.get_room(room_id)
        if room is None:
            raise NotFound('Room not found')
        if store.is_name_taken(room, player_name.strip()):
            raise Conflict()
    return jsonify({'message': f'Name {player_name} is available', 'available': True})
