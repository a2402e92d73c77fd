"""Local storage for the cart and session.

The storefront mirrors two keys after every state change: ``cart`` (a list of
product snapshots) and ``user`` (the session, absent when signed out).
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from .models import Product, Session
from .state import AppState

logger = logging.getLogger(__name__)

CART_KEY = "cart"
USER_KEY = "user"


class Storage(Protocol):
    def load(self) -> AppState: ...

    def save(self, state: AppState) -> None: ...


def _encode(state: AppState) -> Dict[str, Any]:
    data: Dict[str, Any] = {CART_KEY: [line.model_dump() for line in state.cart]}
    if state.session is not None:
        data[USER_KEY] = state.session.model_dump()
    return data


def _decode(data: Dict[str, Any]) -> AppState:
    state = AppState()
    lines = data.get(CART_KEY) or []
    if not isinstance(lines, list):
        logger.warning(f"Discarding unreadable cart: expected a list, got {type(lines).__name__}")
        lines = []
    try:
        cart = tuple(Product.model_validate(line) for line in lines)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable cart: {e}")
        cart = ()
    session = None
    if data.get(USER_KEY):
        try:
            session = Session.model_validate(data[USER_KEY])
        except ValidationError as e:
            logger.warning(f"Discarding unreadable session: {e}")
    return replace(state, cart=cart, session=session)


class MemoryStorage:
    """Keeps the stored keys in a dict."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data or {})
        self.saves = 0

    def load(self) -> AppState:
        return _decode(self.data)

    def save(self, state: AppState) -> None:
        self.data = _encode(state)
        self.saves += 1


class JsonFileStorage:
    """Keeps the stored keys in a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> AppState:
        if not self.path.exists():
            return AppState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.path}: {e}")
            return AppState()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.path}: expected a JSON object")
            return AppState()
        return _decode(data)

    def save(self, state: AppState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(_encode(state), indent=2), encoding="utf-8")
