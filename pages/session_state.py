"""Session-level navigation states and the transitions actions may cause."""
import re
from enum import Enum
from urllib.parse import urlsplit

from config.pages import URL_PATTERNS
from utils.exceptions import UnexpectedState


class SessionState(Enum):
    LOGGED_OUT = "logged_out"
    LOGGING_IN = "logging_in"
    LOGIN_ERROR = "login_error"
    INVENTORY = "inventory"
    CART = "cart"
    CHECKOUT_INFO = "checkout_info"
    CHECKOUT_OVERVIEW = "checkout_overview"
    UNKNOWN = "unknown"


TRANSITIONS = {
    SessionState.LOGGED_OUT: frozenset({SessionState.LOGGING_IN}),
    SessionState.LOGIN_ERROR: frozenset({SessionState.LOGGING_IN}),
    SessionState.LOGGING_IN: frozenset({SessionState.INVENTORY, SessionState.LOGIN_ERROR}),
    SessionState.INVENTORY: frozenset({SessionState.CART}),
    SessionState.CART: frozenset({SessionState.INVENTORY, SessionState.CHECKOUT_INFO}),
    SessionState.CHECKOUT_INFO: frozenset({SessionState.CART, SessionState.CHECKOUT_OVERVIEW}),
    SessionState.CHECKOUT_OVERVIEW: frozenset(),
}

# 页面 key -> 该页面对应的会话状态
PAGE_STATES = {
    "login": SessionState.LOGGED_OUT,
    "inventory": SessionState.INVENTORY,
    "cart": SessionState.CART,
    "checkout_step_one": SessionState.CHECKOUT_INFO,
    "checkout_step_two": SessionState.CHECKOUT_OVERVIEW,
}


def url_matches(url: str, page_key: str) -> bool:
    path = urlsplit(url or "").path
    return re.search(URL_PATTERNS[page_key], path) is not None


def state_for_url(url: str) -> SessionState:
    for page_key, state in PAGE_STATES.items():
        if url_matches(url, page_key):
            return state
    return SessionState.UNKNOWN


def is_allowed(src: SessionState, dst: SessionState) -> bool:
    return dst in TRANSITIONS.get(src, frozenset())


def check_transition(src: SessionState, dst: SessionState, action: str = ""):
    if not is_allowed(src, dst):
        raise UnexpectedState(f"{action or 'action'} cannot move session from {src.name} to {dst.name}",
                              {"from": src.name, "to": dst.name})
