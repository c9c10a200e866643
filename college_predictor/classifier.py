import re
from typing import Optional

from .models import CollegeType

_UNAIDED_WORD = re.compile(r"\bunaided\b")
_AIDED_WORD = re.compile(r"\baided\b")


def classify(institute: Optional[str]) -> CollegeType:
    """
    Derive the college type from a free-text institute name.

    Rules are checked in order and the first match wins, so
    "Government Autonomous" never falls through to plain "Government"
    and "-aided" never falls through to "Aided". "-aided" matches anywhere
    in the name, not only at the start, so "ABC -aided Polytechnic" and
    "Un-Aided" are both Unaided.

    Args:
        institute (str): Institute name, may be None or NaN

    Returns:
        CollegeType: Derived college type
    """
    if not isinstance(institute, str) or not institute.strip():
        return CollegeType.OTHER

    name = institute.casefold()

    if "government" in name and "autonomous" in name:
        return CollegeType.GOVERNMENT_AUTONOMOUS
    if "government" in name:
        return CollegeType.GOVERNMENT
    if "-aided" in name or _UNAIDED_WORD.search(name):
        return CollegeType.UNAIDED
    if _AIDED_WORD.search(name):
        return CollegeType.AIDED
    if "autonomous" in name:
        return CollegeType.AUTONOMOUS
    return CollegeType.OTHER
