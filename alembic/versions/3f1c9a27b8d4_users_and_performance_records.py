"""users and performance records

Revision ID: 3f1c9a27b8d4
Revises: 
Create Date: 2026-10-15 10:12:41.204318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a27b8d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('surname', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('role', sa.String(16), nullable=False, server_default='user'),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_blocked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('blocked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('job_title', sa.String(100), nullable=True),
        sa.Column('department', sa.String(100), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('reset_password_token', sa.String(255), nullable=True),
        sa.Column('reset_password_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('failed_login_attempts >= 0', name='ck_users_failed_login_attempts'),
        sa.CheckConstraint("status IN ('active', 'inactive')", name='ck_users_status'),
        sa.CheckConstraint("role IN ('admin', 'manager', 'user')", name='ck_users_role'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_status', 'users', ['status'])

    op.create_table(
        'performance_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('revenue', sa.Float(), nullable=False),
        sa.Column('revenue_target', sa.Float(), nullable=False),
        sa.Column('new_clients', sa.Integer(), nullable=False),
        sa.Column('appointments_completed', sa.Integer(), nullable=False),
        sa.Column('appointments_planned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sales_completed', sa.Integer(), nullable=False),
        sa.Column('files_updated', sa.Integer(), nullable=False),
        sa.Column('total_files', sa.Integer(), nullable=False),
        sa.Column('events', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('satisfaction', sa.Float(), nullable=False, server_default='4'),
        sa.Column('comment', sa.String(500), nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='validated'),
        sa.Column('validated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'year', 'month', name='uq_performance_user_year_month'),
        sa.CheckConstraint('sales_completed <= appointments_completed', name='ck_performance_sales_le_appointments'),
        sa.CheckConstraint('files_updated <= total_files', name='ck_performance_files_le_total'),
        sa.CheckConstraint('year BETWEEN 2020 AND 2030', name='ck_performance_year'),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_performance_month'),
        sa.CheckConstraint('satisfaction BETWEEN 1 AND 5', name='ck_performance_satisfaction'),
    )
    op.create_index('ix_performance_records_id', 'performance_records', ['id'])
    op.create_index('ix_performance_records_user_id', 'performance_records', ['user_id'])
    op.create_index('ix_performance_records_status', 'performance_records', ['status'])
    op.create_index('ix_performance_year_month', 'performance_records', ['year', 'month'])


def downgrade() -> None:
    op.drop_table('performance_records')
    op.drop_table('users')
