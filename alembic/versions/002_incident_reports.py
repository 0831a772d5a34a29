"""incident_reports

Revision ID: 002_incident_reports
Revises: 001_initial_schema
Create Date: 2026-10-19 15:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_incident_reports'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('report_type', sa.Enum('verbal', 'physical', 'stalking', 'assault', name='reporttype'), nullable=False),
        sa.Column('lat', sa.Float(), nullable=False),
        sa.Column('lng', sa.Float(), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        sa.Column('status', sa.Enum('pending', 'verified', 'rejected', name='reportstatus'), nullable=False),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_reports_id', 'reports', ['id'])
    op.create_index('idx_reports_user_created', 'reports', ['user_id', 'created_at'])
    op.create_index('idx_reports_type', 'reports', ['report_type'])
    op.create_index('idx_reports_status', 'reports', ['status'])


def downgrade() -> None:
    op.drop_table('reports')

    for enum_name in ('reportstatus', 'reporttype'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
