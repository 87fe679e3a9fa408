"""
Availability rules shared by matching pools, filters and statistics.
"""

from typing import Iterable

from .models import ProspectStatus, TalentProfile, TalentType, MAX_UTILIZATION


def is_available(talent: TalentProfile) -> bool:
    """
    Check whether a talent can take on new work.

    Prospects are available when their status is ``available`` or unset.
    Existing employees are available while their capped utilization is
    below 100%.
    """
    if talent.talent_type is TalentType.PROSPECT:
        return talent.prospect_status in (None, ProspectStatus.AVAILABLE)
    return talent.total_utilization < MAX_UTILIZATION


def available_talents(talents: Iterable[TalentProfile]) -> list[TalentProfile]:
    """Filter talents down to the available ones, keeping catalog order."""
    return [t for t in talents if is_available(t)]


def count_available(talents: Iterable[TalentProfile]) -> int:
    return sum(1 for t in talents if is_available(t))
