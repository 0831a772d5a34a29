"""initial_schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('provider', sa.Enum('phone', 'email', 'google', name='authprovider'), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('trust_score', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_phone', 'users', ['phone'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('contacts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.Enum('emergency', 'guardian', name='contactrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['owner_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_contacts_id', 'contacts', ['id'])
    op.create_index('ix_contacts_phone', 'contacts', ['phone'])
    op.create_index('ix_contacts_email', 'contacts', ['email'])
    op.create_index('idx_contacts_owner_role', 'contacts', ['owner_user_id', 'role'])

    op.create_table('walk_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_user_id', sa.Integer(), nullable=False),
        sa.Column('mode', sa.Enum('friend', 'guardian', 'safe-place', name='walkmode'), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration', sa.String(length=16), nullable=True),
        sa.Column('start_lat', sa.Float(), nullable=False),
        sa.Column('start_lng', sa.Float(), nullable=False),
        sa.Column('current_lat', sa.Float(), nullable=True),
        sa.Column('current_lng', sa.Float(), nullable=True),
        sa.Column('current_updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_lat', sa.Float(), nullable=True),
        sa.Column('end_lng', sa.Float(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['owner_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_walk_sessions_id', 'walk_sessions', ['id'])
    op.create_index('idx_walk_sessions_owner_active', 'walk_sessions', ['owner_user_id', 'is_active'])
    op.create_index('idx_walk_sessions_start_time', 'walk_sessions', ['start_time'])

    op.create_table('walk_session_contacts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('walk_session_id', sa.Integer(), nullable=False),
        sa.Column('contact_id', sa.Integer(), nullable=False),
        sa.Column('scope', sa.Enum('emergency', 'guardian', name='contactscope'), nullable=False),
        sa.ForeignKeyConstraint(['walk_session_id'], ['walk_sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_walk_session_contacts_walk_session_id', 'walk_session_contacts', ['walk_session_id'])
    op.create_index('idx_walk_session_contacts_contact', 'walk_session_contacts', ['contact_id', 'scope'])

    for table in ('walk_check_ins', 'walk_panic_events'):
        op.create_table(table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('walk_session_id', sa.Integer(), nullable=False),
            sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['walk_session_id'], ['walk_sessions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(f'ix_{table}_walk_session_id', table, ['walk_session_id'])

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipient_user_id', sa.Integer(), nullable=False),
        sa.Column('notification_type', sa.Enum('panic', 'walk_started', 'walk_ended', 'check_in', 'report', 'system', name='notificationtype'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('walk_session_id', sa.Integer(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('extra_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['recipient_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_recipient_user_id', 'notifications', ['recipient_user_id'])
    op.create_index('idx_notifications_recipient_read', 'notifications', ['recipient_user_id', 'is_read'])
    op.create_index('idx_notifications_recipient_created', 'notifications', ['recipient_user_id', 'created_at'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('walk_panic_events')
    op.drop_table('walk_check_ins')
    op.drop_table('walk_session_contacts')
    op.drop_table('walk_sessions')
    op.drop_table('contacts')
    op.drop_table('users')

    for enum_name in ('notificationtype', 'contactscope', 'walkmode', 'contactrole', 'authprovider'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
