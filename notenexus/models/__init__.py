"""
Note Nexus Backend — ORM Models
================================

Importing this package registers every table on Base.metadata, which is what
Alembic autogenerate and the test fixtures rely on.
"""

from notenexus.models.user import Role, User
from notenexus.models.course_class import ClassStatus, CourseClass
from notenexus.models.saved_class import SavedClass
from notenexus.models.payment import Payment

__all__ = [
    "Role",
    "User",
    "ClassStatus",
    "CourseClass",
    "SavedClass",
    "Payment",
]
