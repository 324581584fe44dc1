"""
Domain Enums
Business enumerations for application tracking
"""
from enum import Enum
from typing import FrozenSet


class StatusType(str, Enum):
    """Lifecycle stage recorded by a status event (declaration order = chart order)"""
    APPLIED = "Applied"
    TEST = "Test"
    INTERVIEW = "Interview"
    OFFER_AWARDED = "OfferAwarded"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


class TestType(str, Enum):
    """Kind of test administered (only with StatusType.TEST)"""
    __test__ = False  # not a pytest test class

    TECHNICAL = "Technical"
    ENGLISH = "English"
    APTITUDE = "Aptitude"
    OTHER = "Other"


class InterviewType(str, Enum):
    """Kind of interview conducted (only with StatusType.INTERVIEW)"""
    HR = "Hr"
    BEHAVIOURAL = "Behavioural"
    TECHNICAL = "Technical"
    OTHER = "Other"


class ApplicationType(str, Enum):
    """Channel the application was submitted through"""
    EMAIL = "Email"
    WEBSITE = "Website"


# Latest statuses counted as forward progress by the success rate
SUCCESSFUL_STATUSES: FrozenSet[StatusType] = frozenset({
    StatusType.OFFER_AWARDED,
    StatusType.INTERVIEW,
    StatusType.TEST,
})

# Events that count as an employer response
RESPONSE_STATUSES: FrozenSet[StatusType] = frozenset({
    StatusType.TEST,
    StatusType.INTERVIEW,
})
