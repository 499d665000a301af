import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list; '*' allows any origin
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    APP_HOST = os.environ.get('APP_HOST', '0.0.0.0')
    APP_PORT = int(os.environ.get('APP_PORT', '3001'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Name given to a player who joins without one
    DEFAULT_PLAYER_NAME = os.environ.get('DEFAULT_PLAYER_NAME', 'guest')
