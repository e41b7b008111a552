from qualifications.models.activity import Activity
from qualifications.models.qualification import Qualification
from qualifications.models.subject import Subject
from qualifications.models.user import User

__all__ = [
    "Activity",
    "Qualification",
    "Subject",
    "User",
]
