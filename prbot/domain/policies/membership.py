"""Organization membership policy.

``GET /orgs/{org}/members/{user}`` answers 204 for members and 404 otherwise.
404 is also what comes back when the app lacks Organization::Members read
access and the user is a private member. Anything else (302 when the requester
is not an org member, 5xx, ...) is an anomaly.
"""

from __future__ import annotations

from prbot.domain.value_objects.enums import MembershipStatus

MEMBER_STATUS = 204
NOT_MEMBER_STATUS = 404


def classify_membership(status_code: int) -> MembershipStatus:
    if status_code == MEMBER_STATUS:
        return MembershipStatus.MEMBER
    if status_code == NOT_MEMBER_STATUS:
        return MembershipStatus.NOT_MEMBER
    return MembershipStatus.UNKNOWN


def is_member(status: MembershipStatus) -> bool:
    """Only an authoritative 204 counts; unknown statuses fall back to "not a member"."""
    return status == MembershipStatus.MEMBER
