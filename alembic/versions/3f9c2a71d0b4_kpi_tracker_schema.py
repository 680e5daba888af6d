"""kpi tracker schema

Revision ID: 3f9c2a71d0b4
Revises: 
Create Date: 2026-10-19 11:52:04.118230

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a71d0b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('designation', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_team_members_id', 'team_members', ['id'])
    op.create_index('ix_team_members_designation', 'team_members', ['designation'])

    op.create_table(
        'kpi_definitions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('display_label', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('value_kind', sa.String(), nullable=False, server_default='count'),
        sa.Column('unit', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_kpi_definitions_id', 'kpi_definitions', ['id'])
    # unique index, matches Column(unique=True, index=True)
    op.create_index('ix_kpi_definitions_key', 'kpi_definitions', ['key'], unique=True)

    op.create_table(
        'designation_targets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('designation', sa.String(), nullable=False),
        sa.Column('kpi_key', sa.String(), nullable=False),
        sa.Column('monthly_target', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('annual_target', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('designation', 'kpi_key', name='uq_designation_kpi'),
    )
    op.create_index('ix_designation_targets_id', 'designation_targets', ['id'])
    op.create_index('ix_designation_targets_designation', 'designation_targets', ['designation'])

    op.create_table(
        'user_targets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('team_members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('kpi_key', sa.String(), nullable=False),
        sa.Column('monthly_target', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('annual_target', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('member_id', 'kpi_key', name='uq_member_kpi'),
    )
    op.create_index('ix_user_targets_id', 'user_targets', ['id'])
    op.create_index('ix_user_targets_member_id', 'user_targets', ['member_id'])

    op.create_table(
        'performance_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('team_members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('values', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('member_id', 'month', 'year', name='uq_member_month_year'),
    )
    op.create_index('ix_performance_records_id', 'performance_records', ['id'])


def downgrade() -> None:
    op.drop_index('ix_performance_records_id', table_name='performance_records')
    op.drop_table('performance_records')
    op.drop_index('ix_user_targets_member_id', table_name='user_targets')
    op.drop_index('ix_user_targets_id', table_name='user_targets')
    op.drop_table('user_targets')
    op.drop_index('ix_designation_targets_designation', table_name='designation_targets')
    op.drop_index('ix_designation_targets_id', table_name='designation_targets')
    op.drop_table('designation_targets')
    op.drop_index('ix_kpi_definitions_key', table_name='kpi_definitions')
    op.drop_index('ix_kpi_definitions_id', table_name='kpi_definitions')
    op.drop_table('kpi_definitions')
    op.drop_index('ix_team_members_designation', table_name='team_members')
    op.drop_index('ix_team_members_id', table_name='team_members')
    op.drop_table('team_members')
