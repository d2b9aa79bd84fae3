# This project was developed with assistance from AI tools.
"""
SVF Recovery -- domain models

Field agents, the loans ("PT" numbers) they chase, the visit-cycle
assignments binding the two, and the responses recorded on each visit.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import EmployeeRole, EmployeeStatus


def _enum_values(enum_cls) -> list[str]:
    """Persist enum values ('agent') rather than member names ('AGENT')."""
    return [member.value for member in enum_cls]


class Agent(Base):
    """Employee profile; only active, non-deleted agents may use the API."""

    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    role = Column(
        Enum(
            EmployeeRole,
            name="employee_role",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=EmployeeRole.AGENT,
    )
    status = Column(
        Enum(
            EmployeeStatus,
            name="employee_status",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=EmployeeStatus.ACTIVE,
    )
    is_deleted = Column(Boolean, nullable=False, default=False)
    branch_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assignments = relationship("Assignment", back_populates="agent")

    def __repr__(self):
        return f"<Agent(id={self.id}, user_name='{self.user_name}')>"


class LoanAccount(Base):
    """One pawn loan ("PT") with its customer's contact details.

    Maintained by back-office staff; the API only reads it.
    """

    __tablename__ = "loan_accounts"
    __table_args__ = (
        CheckConstraint("loan_amount >= 0", name="ck_loan_amount_non_negative"),
        CheckConstraint("interest_rate >= 0", name="ck_interest_rate_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    pt_no = Column(String(50), unique=True, nullable=False, index=True)
    customer_id = Column(String(50), nullable=False, index=True)
    customer_name = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    contact_number1 = Column(String(20), nullable=True)
    contact_number2 = Column(String(20), nullable=True)
    nominee_name = Column(String(255), nullable=True)
    nominee_contact_number = Column(String(20), nullable=True)
    ornament_name = Column(String(255), nullable=True)
    gross_weight = Column(Numeric(10, 3), nullable=True)
    net_weight = Column(Numeric(10, 3), nullable=True)
    loan_amount = Column(Numeric(12, 2), nullable=False, default=0)
    interest_rate = Column(Numeric(5, 2), nullable=False, default=0)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    tenure = Column(Integer, nullable=True)
    loan_created_date = Column(Date, nullable=True)
    last_date = Column(Date, nullable=True)
    first_letter_date = Column(Date, nullable=True)
    second_letter_date = Column(Date, nullable=True)
    final_letter_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    assignments = relationship("Assignment", back_populates="loan")

    def __repr__(self):
        return f"<LoanAccount(pt_no='{self.pt_no}', customer_id='{self.customer_id}')>"


class Assignment(Base):
    """A loan assigned to an agent for one visit cycle.

    The row with the highest ``no_of_visit`` for a (pt_no, agent_id) pair is
    the current cycle.
    """

    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("pt_no", "agent_id", "no_of_visit", name="uq_assignment_cycle"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    pt_no = Column(
        String(50), ForeignKey("loan_accounts.pt_no", ondelete="CASCADE"), nullable=False, index=True,
    )
    customer_id = Column(String(50), nullable=False, index=True)
    agent_id = Column(
        Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    no_of_visit = Column(Integer, nullable=False, default=1)
    is_closed = Column(Boolean, nullable=False, default=False)
    is_visited = Column(Boolean, nullable=False, default=False)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    agent = relationship("Agent", back_populates="assignments")
    loan = relationship("LoanAccount", back_populates="assignments")

    def __repr__(self):
        return (
            f"<Assignment(pt_no='{self.pt_no}', agent_id={self.agent_id}, "
            f"visit={self.no_of_visit}, closed={self.is_closed})>"
        )


class RecoveryResponse(Base):
    """Outcome an agent recorded for one loan in one visit cycle."""

    __tablename__ = "recovery_responses"
    __table_args__ = (
        UniqueConstraint("pt_no", "agent_id", "no_of_visit", name="uq_response_cycle"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    pt_no = Column(
        String(50), ForeignKey("loan_accounts.pt_no", ondelete="CASCADE"), nullable=False, index=True,
    )
    customer_id = Column(String(50), nullable=False, index=True)
    agent_id = Column(
        Integer, ForeignKey("agents.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    response_text = Column(String(100), nullable=False)
    response_description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    no_of_visit = Column(Integer, nullable=False)
    response_timestamp = Column(DateTime(timezone=True), nullable=False)
    completed_date = Column(DateTime(timezone=True), nullable=True)
    device_id = Column(String(255), nullable=True)
    branch_id = Column(Integer, nullable=True)

    agent = relationship("Agent")

    def __repr__(self):
        return (
            f"<RecoveryResponse(pt_no='{self.pt_no}', agent_id={self.agent_id}, "
            f"visit={self.no_of_visit}, response='{self.response_text}')>"
        )
