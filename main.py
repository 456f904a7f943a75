"""
Local entry point for the checkout function.

Runs the same handler the serverless platform calls, either once for a
payload file or behind a small development endpoint the booking form can
post to.

Usage:
    One request:  python main.py invoke booking.json
    From stdin:   echo '{"name": ...}' | python main.py invoke -
    Dev server:   python main.py serve --port 8888
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rental_checkout.config import load_config
from rental_checkout.handler import CheckoutRequestHandler
from rental_checkout.logging_context import new_request_id, set_request_id

logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/.netlify/functions/create-checkout"


def _read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _run_invoke(checkout: CheckoutRequestHandler, source: str, method: str) -> int:
    """Send one payload through the handler and print the response."""
    set_request_id(new_request_id())
    response = checkout.handle(method, _read_payload(source))
    sys.stdout.write(json.dumps(response, indent=2, ensure_ascii=False) + "\n")
    return 0 if response["statusCode"] == 200 else 1


def _run_server(checkout: CheckoutRequestHandler, host: str, port: int) -> None:
    """Serve the handler with Flask for front-end development."""
    from flask import Flask, Response, request

    app = Flask(__name__)

    @app.route(CHECKOUT_PATH, methods=["GET", "POST", "PUT", "DELETE", "PATCH"])
    def create_checkout():
        set_request_id(new_request_id())
        result = checkout.handle(request.method, request.get_data())
        return Response(
            result["body"],
            status=result["statusCode"],
            headers=result["headers"],
        )

    logger.info("Serving checkout on http://%s:%d%s", host, port, CHECKOUT_PATH)
    app.run(host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run the rental checkout handler locally."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    invoke = sub.add_parser("invoke", help="Handle one booking payload.")
    invoke.add_argument("payload", help="Path to a JSON payload, or - for stdin.")
    invoke.add_argument("--method", default="POST", help="HTTP method to simulate.")

    serve = sub.add_parser("serve", help="Serve a local development endpoint.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8888)

    args = parser.parse_args()

    checkout = CheckoutRequestHandler(load_config())
    if args.command == "invoke":
        sys.exit(_run_invoke(checkout, args.payload, args.method))
    _run_server(checkout, args.host, args.port)


if __name__ == "__main__":
    main()
