import argparse
import logging
import os
import signal
import threading

from flask import Flask
from werkzeug.serving import make_server

WELCOME_MESSAGE = "Spring boot app deployment in Kubernetes cluster !"

app = Flask(__name__)

# Under gunicorn, log through its handlers so output lands in the container log
if __name__ != '__main__':
    gunicorn_logger = logging.getLogger('gunicorn.error')
    if gunicorn_logger.handlers:
        app.logger.handlers = gunicorn_logger.handlers
        app.logger.setLevel(gunicorn_logger.level)


@app.route('/welcome', methods=['GET'])
def welcome():
    return WELCOME_MESSAGE, 200, {'Content-Type': 'text/plain; charset=utf-8'}


def port_number(value):
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Serve the welcome endpoint.")
    parser.add_argument('--host', default=os.getenv('HOST', '0.0.0.0'))
    parser.add_argument('--port', type=port_number, default=os.getenv('PORT', '8080'))
    return parser.parse_args(argv)


def create_server(host, port):
    """Bind the port and return a threaded WSGI server for ``app``.

    Werkzeug reports a failed bind on stderr and raises ``SystemExit(1)``.
    """
    return make_server(host, port, app, threaded=True)


def install_signal_handlers(server):
    def _stop(signum, frame):
        app.logger.info("Received %s, shutting down", signal.Signals(signum).name)
        # shutdown() waits for serve_forever(), which runs on this thread
        threading.Thread(target=server.shutdown, daemon=True).start()

    signal.signal(signal.SIGTERM, _stop)
    signal.signal(signal.SIGINT, _stop)


def main(argv=None):
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)
    try:
        server = create_server(args.host, args.port)
    except SystemExit:
        app.logger.error("Could not bind %s:%s", args.host, args.port)
        raise

    install_signal_handlers(server)
    app.logger.info("Listening on http://%s:%s", args.host, server.server_port)
    try:
        server.serve_forever()
    finally:
        server.server_close()
    app.logger.info("Server stopped")
    return 0


if __name__ == '__main__':
    # Binds 0.0.0.0 by default (important for Docker/Kubernetes)
    raise SystemExit(main())
