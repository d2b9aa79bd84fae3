# This project was developed with assistance from AI tools.
"""
Domain enums for field recovery visits.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class EmployeeRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    AGENT = "agent"


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ResponseCategory(str, enum.Enum):
    CALL_NOT_LIFTING = "Call not lifting"
    CUSTOMER_NOT_AT_HOME = "Customer not at home"
    REQUESTED_TIME = "Requested time"
    OTHERS = "Others"
