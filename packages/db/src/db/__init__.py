# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import EmployeeRole, EmployeeStatus, ResponseCategory
from .models import Agent, Assignment, LoanAccount, RecoveryResponse

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "EmployeeRole",
    "EmployeeStatus",
    "ResponseCategory",
    # Models
    "Agent",
    "Assignment",
    "LoanAccount",
    "RecoveryResponse",
]
