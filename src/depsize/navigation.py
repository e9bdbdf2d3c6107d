"""Keyboard navigation state for the package list.

This module has no terminal or rendering concerns. Every transition takes the
current state plus the viewport height and collection length, and returns a
new state. All index arithmetic is clamped, so no input sequence can move the
scroll offset or the selection outside the collection.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Rows taken by the table header and the panel borders
RESERVED_ROWS = 4


class ViewMode(str, Enum):
    """Which view is on screen."""

    LIST = "list"
    DETAIL = "detail"


class NavKey(str, Enum):
    """Logical navigation inputs."""

    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ENTER = "enter"
    ESCAPE = "escape"
    QUIT = "quit"
    OTHER = "other"


# Terminal key names (as reported by textual) to logical inputs
KEY_NAMES: dict[str, NavKey] = {
    "up": NavKey.UP,
    "k": NavKey.UP,
    "down": NavKey.DOWN,
    "j": NavKey.DOWN,
    "pageup": NavKey.PAGE_UP,
    "pagedown": NavKey.PAGE_DOWN,
    "home": NavKey.HOME,
    "end": NavKey.END,
    "enter": NavKey.ENTER,
    "escape": NavKey.ESCAPE,
    "q": NavKey.QUIT,
}


def key_from_name(name: str) -> NavKey:
    """Map a terminal key name to a navigation input."""
    return KEY_NAMES.get(name, NavKey.OTHER)


class NavigationState(BaseModel):
    """Scroll position, selection and view mode of the interactive table."""

    model_config = ConfigDict(frozen=True)

    mode: ViewMode = Field(ViewMode.LIST, description="Current view")
    scroll_offset: int = Field(0, ge=0, description="Index of the first visible row")
    selected_index: Optional[int] = Field(None, description="Highlighted row, if any")
    quit_requested: bool = Field(False, description="Whether the user asked to quit")

    @property
    def in_detail(self) -> bool:
        return self.mode == ViewMode.DETAIL


def visible_rows(viewport_height: int) -> int:
    """Number of table rows that fit in a viewport of the given height."""
    return max(viewport_height - RESERVED_ROWS, 0)


def max_scroll(total: int, visible: int) -> int:
    """Largest scroll offset that still fills the viewport."""
    return max(total - visible, 0)


def clamp_to_viewport(
    state: NavigationState, viewport_height: int, total: int
) -> NavigationState:
    """
    Pull the scroll offset back inside the collection for the current viewport.

    Called on every frame since the terminal may have been resized. The
    selection is left alone.
    """
    limit = max_scroll(total, visible_rows(viewport_height))
    if state.scroll_offset <= limit:
        return state
    return state.model_copy(update={"scroll_offset": limit})


def handle_key(
    state: NavigationState, key: NavKey, viewport_height: int, total: int
) -> NavigationState:
    """
    Compute the state that follows a key press.

    Args:
        state: Current state
        key: Logical input
        viewport_height: Current terminal height in rows
        total: Number of packages in the collection

    Returns:
        The next state (the same object when the key is a no-op)
    """
    if key == NavKey.QUIT:
        return state.model_copy(update={"quit_requested": True})

    if state.mode == ViewMode.DETAIL:
        if key == NavKey.ESCAPE:
            return state.model_copy(update={"mode": ViewMode.LIST})
        return state

    return _handle_list_key(state, key, visible_rows(viewport_height), total)


def _handle_list_key(
    state: NavigationState, key: NavKey, visible: int, total: int
) -> NavigationState:
    offset = state.scroll_offset
    selected = state.selected_index
    last = total - 1
    limit = max_scroll(total, visible)

    if key in (NavKey.UP, NavKey.DOWN):
        if total == 0:
            return state
        if selected is None:
            selected = min(offset, last)
        elif key == NavKey.UP:
            selected = max(selected - 1, 0)
            if selected < offset:
                offset = selected
        else:
            selected = min(selected + 1, last)
            if selected >= offset + visible:
                offset = min(selected - visible + 1, limit)

    elif key == NavKey.PAGE_UP:
        offset = max(offset - visible, 0)
        if selected is not None:
            selected = max(selected - visible, 0)

    elif key == NavKey.PAGE_DOWN:
        offset = min(offset + visible, limit)
        if selected is not None:
            selected = min(selected + visible, last)

    elif key == NavKey.HOME:
        offset = 0
        if selected is not None:
            selected = 0

    elif key == NavKey.END:
        offset = limit
        if selected is not None:
            selected = last

    elif key == NavKey.ENTER:
        if selected is None:
            return state
        return state.model_copy(update={"mode": ViewMode.DETAIL})

    else:
        return state

    return state.model_copy(update={"scroll_offset": offset, "selected_index": selected})
