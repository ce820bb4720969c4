from typing import Iterable, List, Optional

LIKE_ESCAPE = "/"


def normalize(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.strip().lower().split())


def search_term(text: Optional[str]) -> str:
    """The exact text matched against stored fields: trimmed and lower-cased.

    Inner whitespace is kept so "java  sql" still finds "Java  SQL".
    """
    if not text:
        return ""
    return text.strip().lower()


def clean_values(values: Optional[Iterable[str]]) -> List[str]:
    """Search terms for a list filter, dropping blanks and duplicates in order."""
    seen: set[str] = set()
    out: List[str] = []
    for v in values or []:
        key = normalize(v)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(search_term(v))
    return out


def like_pattern(value: Optional[str]) -> str:
    """Wrap a value for a case-insensitive substring ILIKE, escaping wildcards."""
    escaped = (
        search_term(value)
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
