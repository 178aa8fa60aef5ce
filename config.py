import os

basedir = os.path.abspath(os.path.dirname(__file__))


def _origins(value):
    if value == '*':
        return value
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '8080'))
    DEBUG = os.environ.get('DEBUG', '0') == '1'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Socket.IO namespace the relay listens on
    WS_NAMESPACE = os.environ.get('WS_NAMESPACE', '/ws')
    # Static client served on the same port
    CLIENT_DIR = os.environ.get('CLIENT_DIR') or os.path.join(basedir, 'client')
    CLIENT_INDEX = os.environ.get('CLIENT_INDEX', 'xiangqi_lan.html')
    CORS_ORIGINS = _origins(os.environ.get('CORS_ORIGINS', '*'))
