"""Bearer token authentication for API blueprints."""

import hmac
import logging

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)


def _configured_tokens() -> list[str]:
    config = current_app.extensions.get("config")
    if config is None:
        return []
    return config.auth.tokens


def is_valid_token(token: str, tokens: list[str]) -> bool:
    """Compare a presented token against the accepted ones in constant time."""
    presented = token.encode()
    # Check every token so timing does not reveal which one matched
    matched = False
    for candidate in tokens:
        if hmac.compare_digest(presented, candidate.encode()):
            matched = True
    return matched


def require_bearer_token():
    """``before_request`` hook rejecting requests without a valid token.

    Returns:
        None to continue, or a 401 JSON response.
    """
    if request.method == "OPTIONS":
        return None

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return jsonify({"error": "missing bearer token", "code": "UNAUTHORIZED"}), 401

    tokens = _configured_tokens()
    if not tokens:
        logger.warning("Rejecting request: no API tokens configured")
        return jsonify({"error": "invalid token", "code": "UNAUTHORIZED"}), 401

    if not is_valid_token(token.strip(), tokens):
        logger.info(f"Rejected invalid token from {request.remote_addr}")
        return jsonify({"error": "invalid token", "code": "UNAUTHORIZED"}), 401

    return None
