from typing import Any

from pydantic import BaseModel, model_validator

from enums.language import Language


class BilingualText(BaseModel):
    """
    Text stored once per storefront language.

    Documents written by older admin forms may omit one side or the whole
    value; both sides default to an empty string.
    """
    en: str = ""
    ar: str = ""

    @model_validator(mode="before")
    @classmethod
    def fill_missing(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, str):
            return {"en": data, "ar": data}
        if isinstance(data, dict):
            return {key: ("" if data.get(key) is None else data.get(key)) for key in ("en", "ar")}
        return data

    @classmethod
    def from_flat(cls, document: dict, prefix: str) -> "BilingualText":
        """Build from the `<prefix>_en` / `<prefix>_ar` layout used by the settings document."""
        return cls(en=document.get(f"{prefix}_en"), ar=document.get(f"{prefix}_ar"))


def resolve(value: BilingualText | None, language: Language | str) -> str:
    """
    Pick the text for the requested language.

    Example:
        >>> resolve(BilingualText(en="Rose", ar="ورد"), Language.AR)
        'ورد'
    """
    if value is None:
        return ""
    language = Language(language)
    if language == Language.AR:
        return value.ar
    return value.en
