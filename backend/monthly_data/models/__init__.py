"""ORM Models — SQLAlchemy declarative models.

Both models imported here so string-based relationship() references resolve
before any query runs.
"""

from monthly_data.models.user import User  # noqa: F401
from monthly_data.models.monthly_record import MonthlyRecord  # noqa: F401
