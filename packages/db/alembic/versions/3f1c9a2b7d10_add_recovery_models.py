# This project was developed with assistance from AI tools.
"""add recovery models

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-12 09:14:22.418305

"""

import sqlalchemy as sa
from alembic import op

revision = "3f1c9a2b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "agents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="agent"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("branch_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_name"),
    )
    op.create_index("ix_agents_user_name", "agents", ["user_name"])

    op.create_table(
        "loan_accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("pt_no", sa.String(50), nullable=False),
        sa.Column("customer_id", sa.String(50), nullable=False),
        sa.Column("customer_name", sa.String(255), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("contact_number1", sa.String(20), nullable=True),
        sa.Column("contact_number2", sa.String(20), nullable=True),
        sa.Column("nominee_name", sa.String(255), nullable=True),
        sa.Column("nominee_contact_number", sa.String(20), nullable=True),
        sa.Column("ornament_name", sa.String(255), nullable=True),
        sa.Column("gross_weight", sa.Numeric(10, 3), nullable=True),
        sa.Column("net_weight", sa.Numeric(10, 3), nullable=True),
        sa.Column("loan_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("interest_rate", sa.Numeric(5, 2), nullable=False, server_default="0"),
        sa.Column("paid_amount", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tenure", sa.Integer(), nullable=True),
        sa.Column("loan_created_date", sa.Date(), nullable=True),
        sa.Column("last_date", sa.Date(), nullable=True),
        sa.Column("first_letter_date", sa.Date(), nullable=True),
        sa.Column("second_letter_date", sa.Date(), nullable=True),
        sa.Column("final_letter_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pt_no"),
        sa.CheckConstraint("loan_amount >= 0", name="ck_loan_amount_non_negative"),
        sa.CheckConstraint("interest_rate >= 0", name="ck_interest_rate_non_negative"),
    )
    op.create_index("ix_loan_accounts_pt_no", "loan_accounts", ["pt_no"])
    op.create_index("ix_loan_accounts_customer_id", "loan_accounts", ["customer_id"])

    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("pt_no", sa.String(50), nullable=False),
        sa.Column("customer_id", sa.String(50), nullable=False),
        sa.Column("agent_id", sa.Integer(), nullable=False),
        sa.Column("no_of_visit", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_visited", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "assigned_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.ForeignKeyConstraint(["pt_no"], ["loan_accounts.pt_no"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pt_no", "agent_id", "no_of_visit", name="uq_assignment_cycle"),
    )
    op.create_index("ix_assignments_pt_no", "assignments", ["pt_no"])
    op.create_index("ix_assignments_customer_id", "assignments", ["customer_id"])
    op.create_index("ix_assignments_agent_id", "assignments", ["agent_id"])

    op.create_table(
        "recovery_responses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("pt_no", sa.String(50), nullable=False),
        sa.Column("customer_id", sa.String(50), nullable=False),
        sa.Column("agent_id", sa.Integer(), nullable=False),
        sa.Column("response_text", sa.String(100), nullable=False),
        sa.Column("response_description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("no_of_visit", sa.Integer(), nullable=False),
        sa.Column("response_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("device_id", sa.String(255), nullable=True),
        sa.Column("branch_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["pt_no"], ["loan_accounts.pt_no"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["agent_id"], ["agents.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pt_no", "agent_id", "no_of_visit", name="uq_response_cycle"),
    )
    op.create_index("ix_recovery_responses_pt_no", "recovery_responses", ["pt_no"])
    op.create_index("ix_recovery_responses_customer_id", "recovery_responses", ["customer_id"])
    op.create_index("ix_recovery_responses_agent_id", "recovery_responses", ["agent_id"])


def downgrade() -> None:
    op.drop_table("recovery_responses")
    op.drop_table("assignments")
    op.drop_table("loan_accounts")
    op.drop_table("agents")
