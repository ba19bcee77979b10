from typing import Any, Iterable, List

SEARCH_FIELDS = ("name", "city", "address")


def _field(school: Any, name: str) -> str:
    if isinstance(school, dict):
        value = school.get(name)
    else:
        value = getattr(school, name, None)
    return value or ""


def matches(school: Any, query: str) -> bool:
    """True when ``query`` occurs in the school's name, city or address, ignoring case"""
    needle = query.lower()
    return any(needle in _field(school, field).lower() for field in SEARCH_FIELDS)


def filter_schools(schools: Iterable[Any], query: str) -> List[Any]:
    """Filter an already fetched list of schools; an empty query keeps them all"""
    if not query:
        return list(schools)
    return [school for school in schools if matches(school, query)]
