from .user import User
from .user_data import UserData
from .game import Game
from .review import Review
from .enums import ThemeEnum, GameModeEnum
