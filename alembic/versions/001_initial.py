"""initial user and task tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user and task tables."""
    
    op.create_table(
        'user',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)
    op.create_index('ix_user_created_at', 'user', ['created_at'])
    
    # Task user references are plain ids: deleting a user does not cascade
    op.create_table(
        'task',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('assigned_to_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_by_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_task_assigned_to_id', 'task', ['assigned_to_id'])
    op.create_index('ix_task_created_by_id', 'task', ['created_by_id'])
    op.create_index('ix_task_status', 'task', ['status'])
    op.create_index('ix_task_priority', 'task', ['priority'])
    op.create_index('ix_task_created_at', 'task', ['created_at'])


def downgrade() -> None:
    """Drop task and user tables."""
    
    op.drop_index('ix_task_created_at', table_name='task')
    op.drop_index('ix_task_priority', table_name='task')
    op.drop_index('ix_task_status', table_name='task')
    op.drop_index('ix_task_created_by_id', table_name='task')
    op.drop_index('ix_task_assigned_to_id', table_name='task')
    op.drop_table('task')
    
    op.drop_index('ix_user_created_at', table_name='user')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
