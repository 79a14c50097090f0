"""State transitions for the Hey Picture UI.

Every user action maps to one function here. The generation handler calls
``begin_generation`` to obtain a token and later reports back with
``complete_generation`` or ``fail_generation``; a report carrying a token that
is no longer current belongs to a superseded request and is ignored.

    Idle --begin--> Requesting --complete--> Displaying
                         |                      |
                         +------fail-----> Failed
    (any phase) --begin--> Requesting
"""

import logging
from pathlib import Path

from .models import Phase, UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Return ``state``, creating a fresh UIState when it is None."""
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()
    return state


def is_current(state: UIState, token: int) -> bool:
    """Check whether ``token`` belongs to the most recent generation request."""
    return token == state.generation_token


def show_notice(state: UIState, message: str) -> UIState:
    """Show a dismissible notice without touching results or phase."""
    state.message = message
    return state


def dismiss_notice(state: UIState) -> UIState:
    state.message = ""
    return state


def begin_generation(state: UIState) -> int:
    """Start a new generation request.

    Clears previous results and any error or notice, moves to REQUESTING and
    issues a new token, which invalidates any request still in flight.

    Returns:
        Token to pass to complete_generation / fail_generation
    """
    state.generation_token += 1
    state.phase = Phase.REQUESTING
    state.results = []
    state.error = ""
    state.message = ""
    logger.debug(f"Generation {state.generation_token} started")
    return state.generation_token


def complete_generation(state: UIState, token: int, results: list[Path]) -> bool:
    """Display the results of generation ``token``.

    Returns:
        True if the results were applied, False if the token was stale
    """
    if not is_current(state, token):
        logger.info(
            f"Discarding stale results of generation {token} "
            f"(current is {state.generation_token})"
        )
        return False

    state.phase = Phase.DISPLAYING
    state.results = list(results)
    state.error = ""
    return True


def fail_generation(state: UIState, token: int, error: str) -> bool:
    """Record the failure of generation ``token``.

    Returns:
        True if the failure was applied, False if the token was stale
    """
    if not is_current(state, token):
        logger.info(
            f"Discarding stale failure of generation {token} "
            f"(current is {state.generation_token})"
        )
        return False

    state.phase = Phase.FAILED
    state.results = []
    state.error = error
    return True
