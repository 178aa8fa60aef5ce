from xiangqi_relay import create_app, socketio

app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    app.logger.info(f"Server started, open http://localhost:{port}")
    socketio.run(app, host=host, port=port, debug=app.config['DEBUG'], allow_unsafe_werkzeug=True)
