"""Room domain services: authorization, vote statistics, snapshots and the
event state machine.

Nothing in this package touches the Socket.IO transport; the event
handlers in ``poker.socketio_events`` call into it and publish the result.
"""
