"""Create users, classes, saved_classes and payments tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

Column meanings are documented on the ORM models in notenexus/models/.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("photo", sa.String(2048), nullable=True),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Student'"),
            comment="Student, Instructor or Admin",
        ),
        sa.Column("enrolled", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "classes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image", sa.String(2048), nullable=True),
        sa.Column("price", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("instructor_name", sa.String(255), nullable=True),
        sa.Column("instructor_email", sa.String(320), nullable=False),
        sa.Column("seats", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("enrolled", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Pending'"),
            comment="Pending, Approved or Denied",
        ),
        sa.Column(
            "feedback",
            sa.Text(),
            nullable=True,
            comment="Admin's reason for denial; cleared when the instructor edits",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.CheckConstraint("seats >= 0", name="ck_classes_seats_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_classes_instructor_email", "classes", ["instructor_email"])
    op.create_index("idx_classes_status_enrolled", "classes", ["status", "enrolled"])

    op.create_table(
        "saved_classes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("class_id", sa.Uuid(), nullable=False),
        sa.Column("student_email", sa.String(320), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("class_id", "student_email", name="uq_saved_classes_class_student"),
    )
    op.create_index("ix_saved_classes_student_email", "saved_classes", ["student_email"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("class_id", sa.Uuid(), nullable=False),
        sa.Column("student_email", sa.String(320), nullable=False),
        sa.Column("instructor_email", sa.String(320), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("transaction_id", sa.String(255), nullable=True),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("class_id", "student_email", name="uq_payments_class_student"),
    )
    op.create_index("idx_payments_student_date", "payments", ["student_email", "date"])


def downgrade() -> None:
    op.drop_index("idx_payments_student_date", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_saved_classes_student_email", table_name="saved_classes")
    op.drop_table("saved_classes")
    op.drop_index("idx_classes_status_enrolled", table_name="classes")
    op.drop_index("ix_classes_instructor_email", table_name="classes")
    op.drop_table("classes")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
