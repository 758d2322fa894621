from enum import Enum

from rules_sync.models import ActionStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


ACTION_STATUS_STYLE = {
    ActionStatus.CREATE: UIStyle.GREEN.value,
    ActionStatus.UPDATE: UIStyle.CYAN.value,
}

TARGET_STYLE = {
    "cursor": UIStyle.CYAN.value,
    "github": UIStyle.MAGENTA.value,
    "claude": UIStyle.YELLOW.value,
    "gemini": UIStyle.BLUE.value,
    "docs": UIStyle.GREEN.value,
}
