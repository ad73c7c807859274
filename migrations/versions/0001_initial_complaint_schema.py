"""
Migration: Initial complaint tracking schema

This migration creates:
- users: accounts with a role of user, staff or admin
- complaints: submitted complaints with status, assignee and resolution time
- complaint_updates: append-only timeline of every lifecycle event
- escalations: hand-offs of a complaint to a higher-authority user
- feedback: 1-5 star service ratings
- system_config: key/value settings
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers
revision = '0001_initial_complaint_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=10), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'complaints',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('subject', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('file_path', sa.String(length=255), nullable=True),
        sa.Column('urgency', sa.String(length=20), nullable=True, server_default='Medium'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='New'),
        sa.Column('assigned_to', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_complaints_user_id', 'complaints', ['user_id'])

    op.create_table(
        'complaint_updates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('complaint_id', sa.Integer(), sa.ForeignKey('complaints.id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('updated_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_complaint_updates_complaint_id', 'complaint_updates', ['complaint_id'])

    op.create_table(
        'escalations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('complaint_id', sa.Integer(), sa.ForeignKey('complaints.id'), nullable=False),
        sa.Column('escalated_to', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('escalated_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_escalations_complaint_id', 'escalations', ['complaint_id'])

    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'system_config',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('config_key', sa.String(length=100), nullable=False),
        sa.Column('config_value', sa.Text(), nullable=True),
    )
    op.create_index('ix_system_config_config_key', 'system_config', ['config_key'], unique=True)


def downgrade():
    op.drop_index('ix_system_config_config_key', table_name='system_config')
    op.drop_table('system_config')
    op.drop_table('feedback')
    op.drop_index('ix_escalations_complaint_id', table_name='escalations')
    op.drop_table('escalations')
    op.drop_index('ix_complaint_updates_complaint_id', table_name='complaint_updates')
    op.drop_table('complaint_updates')
    op.drop_index('ix_complaints_user_id', table_name='complaints')
    op.drop_table('complaints')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
