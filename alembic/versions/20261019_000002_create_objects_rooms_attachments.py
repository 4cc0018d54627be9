"""Create objects, object_assignments, rooms and attachments tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Handover objects with their assignees, rooms and images.
The objects table carries a check constraint keeping is_released in
step with status.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000002'
down_revision: Union[str, None] = '20261019_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the handover tables."""
    op.create_table(
        'objects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('postal_code', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('address_supplement', sa.String(length=255), nullable=True),
        sa.Column('room', sa.String(length=100), nullable=True),
        sa.Column('floor', sa.String(length=100), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('draft', 'assigned', 'completed', 'released', name='object_status'),
            nullable=False,
            server_default='draft'
        ),
        sa.Column('is_released', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('parties', sa.JSON(), nullable=False),
        sa.Column('keys', sa.JSON(), nullable=False),
        sa.Column('counters', sa.JSON(), nullable=False),
        sa.Column('miscellaneous', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('signature', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('assigned_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('released_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['created_by'],
            ['users.id'],
            name='fk_objects_created_by',
            ondelete='NO ACTION',
        ),
        sa.CheckConstraint(
            "(status = 'released' AND is_released = 1) OR "
            "(status <> 'released' AND is_released = 0)",
            name='ck_objects_released_in_sync',
        ),
    )
    op.create_index('ix_objects_name', 'objects', ['name'])
    op.create_index('ix_objects_created_by', 'objects', ['created_by'])
    op.create_index('ix_objects_status', 'objects', ['status'])

    op.create_table(
        'object_assignments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('object_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assigned_by', sa.Integer(), nullable=True),
        sa.Column('assigned_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['object_id'],
            ['objects.id'],
            name='fk_object_assignments_object_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_object_assignments_user_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['assigned_by'],
            ['users.id'],
            name='fk_object_assignments_assigned_by',
            ondelete='NO ACTION',
        ),
        sa.UniqueConstraint('object_id', 'user_id', name='uq_object_assignments_object_user'),
    )
    op.create_index('ix_object_assignments_object_id', 'object_assignments', ['object_id'])
    op.create_index('ix_object_assignments_user_id', 'object_assignments', ['user_id'])

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('object_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('flooring', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('walls', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('outlets', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('light_switches', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('windows', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('radiators', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('condition', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['object_id'],
            ['objects.id'],
            name='fk_rooms_object_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_rooms_object_id', 'rooms', ['object_id'])

    op.create_table(
        'attachments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('object_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=True),
        sa.Column(
            'section',
            sa.Enum('keys', 'counters', 'miscellaneous', name='attachment_section'),
            nullable=True
        ),
        sa.Column('storage_id', sa.String(length=500), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['object_id'],
            ['objects.id'],
            name='fk_attachments_object_id',
            ondelete='CASCADE'
        ),
        # NO ACTION: a second cascade path through rooms is rejected by SQL Server
        sa.ForeignKeyConstraint(
            ['room_id'],
            ['rooms.id'],
            name='fk_attachments_room_id',
            ondelete='NO ACTION',
        ),
    )
    op.create_index('ix_attachments_object_id', 'attachments', ['object_id'])
    op.create_index('ix_attachments_room_id', 'attachments', ['room_id'])


def downgrade() -> None:
    """Drop the handover tables."""
    op.drop_index('ix_attachments_room_id', table_name='attachments')
    op.drop_index('ix_attachments_object_id', table_name='attachments')
    op.drop_table('attachments')
    op.drop_index('ix_rooms_object_id', table_name='rooms')
    op.drop_table('rooms')
    op.drop_index('ix_object_assignments_user_id', table_name='object_assignments')
    op.drop_index('ix_object_assignments_object_id', table_name='object_assignments')
    op.drop_table('object_assignments')
    op.drop_index('ix_objects_status', table_name='objects')
    op.drop_index('ix_objects_created_by', table_name='objects')
    op.drop_index('ix_objects_name', table_name='objects')
    op.drop_table('objects')

    op.execute("DROP TYPE IF EXISTS attachment_section")
    op.execute("DROP TYPE IF EXISTS object_status")
