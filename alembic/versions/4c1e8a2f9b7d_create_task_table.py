"""create_task_table

Revision ID: 4c1e8a2f9b7d
Revises: 
Create Date: 2026-10-18 10:02:11.418305

"""
from alembic import op
import sqlalchemy as sa



revision = '4c1e8a2f9b7d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "task",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("priority", sa.String(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_category", "task", ["category"], unique=False)
    op.create_index("ix_task_completed", "task", ["completed"], unique=False)
    op.create_index("ix_task_created_at", "task", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_task_created_at", table_name="task")
    op.drop_index("ix_task_completed", table_name="task")
    op.drop_index("ix_task_category", table_name="task")
    op.drop_table("task")
