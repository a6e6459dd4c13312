from enum import Enum


class UIEntity(Enum):
    ADMIN = 1
    USER = 2
    COMMON = 3
