"""Shared fixtures: a local HTTP server that can sleep before the headers
(delay_ms) and between the headers and the body (stall_ms)."""

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


def _make_handler(delay_ms, stall_ms):
    class Handler(BaseHTTPRequestHandler):
        def _reply(self):
            length = int(self.headers.get("Content-Length") or 0)
            if length:
                self.rfile.read(length)
            time.sleep(delay_ms / 1000)
            path = self.path.split("?", 1)[0]
            if path == "/valid-url":
                body = b'{"Cluster_name": "cl1", "Pings": 2}'
                status = 200
            elif path == "/valid-post-url":
                body = b'{"Cluster_name": "server cluster", "Pings": 202}'
                status = 200
            elif path == "/internal-server-error":
                body = json.dumps({"message": "Some Error Occurred"}).encode()
                status = 500
            else:
                body = b""
                status = 404
            try:
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                time.sleep(stall_ms / 1000)
                self.wfile.write(body)
            except (BrokenPipeError, ConnectionResetError):
                pass

        do_GET = _reply
        do_POST = _reply
        do_PUT = _reply
        do_DELETE = _reply

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def make_server():
    servers = []

    def _start(delay_ms=0, stall_ms=0):
        server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(delay_ms, stall_ms))
        server.daemon_threads = True
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        host, port = server.server_address
        return f"http://{host}:{port}"

    yield _start
    for server in servers:
        server.shutdown()
        server.server_close()
