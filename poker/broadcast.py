from flask_socketio import join_room, leave_room

from poker.models import Room
from poker.services.rooms.snapshot import build_snapshot


class BroadcastAdapter:
    """Publishes room state over Socket.IO.

    The Socket.IO room named after ``Room.id`` is the broadcast group; a
    connection's sid doubles as its private channel.
    """

    def __init__(self, socketio, namespace: str):
        self.socketio = socketio
        self.namespace = namespace

    def subscribe(self, sid: str, room_id: str) -> None:
        join_room(room_id, sid=sid, namespace=self.namespace)

    def unsubscribe(self, sid: str, room_id: str) -> None:
        leave_room(room_id, sid=sid, namespace=self.namespace)

    def publish_room(self, room: Room) -> None:
        snapshot = build_snapshot(room)
        self.socketio.emit('roomUpdate', snapshot.to_dict(), to=room.id, namespace=self.namespace)

    def player_kicked(self, room_id: str, target_id: str) -> None:
        self.socketio.emit('playerKicked', target_id, to=room_id, namespace=self.namespace)
        # The kicked connection has already left the group
        self.socketio.emit('playerKicked', target_id, to=target_id, namespace=self.namespace)

    def admin_disconnected(self, room_id: str) -> None:
        self.socketio.emit('adminDisconnected', to=room_id, namespace=self.namespace)

    def send_error(self, sid: str, message: str) -> None:
        self.socketio.emit('error', message, to=sid, namespace=self.namespace)
