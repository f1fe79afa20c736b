"""ORM Models — SQLAlchemy declarative models.

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
"""

from hexvault.models.user import User  # noqa: F401
