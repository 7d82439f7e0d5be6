from enum import Enum


class Language(str, Enum):
    EN = "en"
    TH = "th"

    @property
    def instruction(self) -> str:
        if self is Language.TH:
            return "in Thai language"
        return "in English language"

    @property
    def max_words(self) -> int:
        # Thai tokens are character-level, so the budget is looser.
        if self is Language.TH:
            return 25
        return 20

    @property
    def joiner(self) -> str:
        return "" if self is Language.TH else " "

    @classmethod
    def parse(cls, value: object) -> "Language | None":
        if not isinstance(value, str) or not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None
