"""Create member, catalog, reservation and waiting tables

Revision ID: 0001_create_reservation_tables
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_reservation_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('USER', 'ADMIN', name='memberrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_members_id'), 'members', ['id'], unique=False)
    op.create_index(op.f('ix_members_email'), 'members', ['email'], unique=True)

    op.create_table('themes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index(op.f('ix_themes_id'), 'themes', ['id'], unique=False)

    op.create_table('reservation_times',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('start_at', sa.Time(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('start_at')
    )
    op.create_index(op.f('ix_reservation_times_id'), 'reservation_times', ['id'], unique=False)

    op.create_table('reservations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_id', sa.Integer(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['members.id']),
        sa.ForeignKeyConstraint(['time_id'], ['reservation_times.id']),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date', 'time_id', 'theme_id', name='uq_reservation_slot')
    )
    op.create_index(op.f('ix_reservations_id'), 'reservations', ['id'], unique=False)
    op.create_index(op.f('ix_reservations_member_id'), 'reservations', ['member_id'], unique=False)

    op.create_table('waiting_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_id', sa.Integer(), nullable=False),
        sa.Column('theme_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id']),
        sa.ForeignKeyConstraint(['time_id'], ['reservation_times.id']),
        sa.ForeignKeyConstraint(['theme_id'], ['themes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('member_id', 'date', 'time_id', 'theme_id', name='uq_waiting_member_slot')
    )
    op.create_index(op.f('ix_waiting_entries_id'), 'waiting_entries', ['id'], unique=False)
    op.create_index(op.f('ix_waiting_entries_member_id'), 'waiting_entries', ['member_id'], unique=False)
    op.create_index('idx_waiting_slot_created', 'waiting_entries', ['date', 'time_id', 'theme_id', 'created_at'], unique=False)


def downgrade():
    op.drop_index('idx_waiting_slot_created', table_name='waiting_entries')
    op.drop_index(op.f('ix_waiting_entries_member_id'), table_name='waiting_entries')
    op.drop_index(op.f('ix_waiting_entries_id'), table_name='waiting_entries')
    op.drop_table('waiting_entries')
    op.drop_index(op.f('ix_reservations_member_id'), table_name='reservations')
    op.drop_index(op.f('ix_reservations_id'), table_name='reservations')
    op.drop_table('reservations')
    op.drop_index(op.f('ix_reservation_times_id'), table_name='reservation_times')
    op.drop_table('reservation_times')
    op.drop_index(op.f('ix_themes_id'), table_name='themes')
    op.drop_table('themes')
    op.drop_index(op.f('ix_members_email'), table_name='members')
    op.drop_index(op.f('ix_members_id'), table_name='members')
    op.drop_table('members')
    sa.Enum(name='memberrole').drop(op.get_bind(), checkfirst=True)
