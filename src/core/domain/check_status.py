from enum import Enum


class CheckStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"
