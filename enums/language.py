from enum import Enum


class Language(str, Enum):
    EN = "en"
    AR = "ar"

    @property
    def direction(self) -> str:
        return "rtl" if self == Language.AR else "ltr"

    def toggled(self) -> "Language":
        return Language.AR if self == Language.EN else Language.EN
