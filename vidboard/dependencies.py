from fastapi import Header, Request

from vidboard.exceptions import AuthenticationError
from vidboard.services.aggregator import YouTubeAggregator
from vidboard.store import JsonStore


def get_aggregator(request: Request) -> YouTubeAggregator:
    return request.app.state.aggregator


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def require_bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Only checks that a bearer token is present; the identity provider verifies it."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Unauthorized")
    token = authorization.removeprefix("Bearer ").strip()
    if not token:
        raise AuthenticationError("Unauthorized")
    return token
