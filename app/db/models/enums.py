"""
Enum types shared by the ORM models and the request/response schemas.
"""

import enum


class ThemeEnum(str, enum.Enum):
    light = "light"
    dark = "dark"


class GameModeEnum(str, enum.Enum):
    single_player = "single-player"
    multiplayer = "multiplayer"
    both = "both"


def enum_values(enum_cls):
    # Persist the enum values ("single-player"), not the member names
    return [member.value for member in enum_cls]
