import re
from typing import Optional


DEFAULT_COMPANY_NAME = "Company"

_LEADING_AL = re.compile(r"^AL\s+", flags=re.IGNORECASE)
_TRAILING_SUFFIX = re.compile(r"\s+(?:COMPANY|CO\.?|LTD\.?|INC\.?)$", flags=re.IGNORECASE)


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def normalize_company_name(name: Optional[str]) -> str:
    if not name:
        return DEFAULT_COMPANY_NAME
    cleaned = str(name).strip()
    cleaned = _LEADING_AL.sub("", cleaned)
    cleaned = _TRAILING_SUFFIX.sub(" Company", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not cleaned:
        return DEFAULT_COMPANY_NAME
    return " ".join(_title_word(word) for word in cleaned.split(" "))
