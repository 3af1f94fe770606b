"""
Plain-text profile server built directly on the standard library HTTP server.
"""
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
import argparse
import logging

from ..config import settings
from ..utils.request_logging import configure_logging

logger = logging.getLogger(__name__)

PERSONAL_INFO = {
    "name": "Sarah",
    "track": "Full-Stack Development",
    "location": "Algiers",
    "experience": "Beginner",
}

AVAILABLE_ROUTES = ["/", "/track", "/location", "/experience", "/all"]


def route_text(path: str) -> str:
    """Return the plain-text body for a request path; unknown paths get the route listing."""
    path = path.split("?", 1)[0]
    info = PERSONAL_INFO
    if path == "/":
        return f"Hi! I'm {info['name']} and I'm in the {info['track']} track."
    if path == "/track":
        return info["track"]
    if path == "/location":
        return f"I'm from {info['location']}"
    if path == "/experience":
        return f"Experience level: {info['experience']}"
    if path == "/all":
        return (
            f"Name: {info['name']}\n"
            f"Track: {info['track']}\n"
            f"Location: {info['location']}\n"
            f"Experience: {info['experience']}"
        )
    return f"Available routes: {', '.join(AVAILABLE_ROUTES)}"


class ProfileRequestHandler(BaseHTTPRequestHandler):
    server_version = "ProfileServer/1.0"

    def do_GET(self):
        body = route_text(self.path).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(host: str = "127.0.0.1", port: int = 3000) -> ThreadingHTTPServer:
    return ThreadingHTTPServer((host, port), ProfileRequestHandler)


def serve(port: Optional[int] = None, host: str = "0.0.0.0") -> None:
    server = create_server(host, port if port is not None else settings.PORT)
    logger.info("Profile server running at http://localhost:%s", server.server_address[1])
    logger.info("Available routes: %s", ", ".join(AVAILABLE_ROUTES))
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down profile server")
    finally:
        server.server_close()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the plain-text profile server")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (defaults to PORT)")
    parser.add_argument("--host", default="0.0.0.0")
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    serve(args.port, args.host)


if __name__ == "__main__":
    main()
