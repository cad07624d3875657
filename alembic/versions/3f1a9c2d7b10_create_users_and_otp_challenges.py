"""create users and otp challenges

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-16 09:41:12.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - users and password reset challenges."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('gender', sa.String(length=10), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=10), server_default='user', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_table(
        'otp_challenges',
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('code_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('attempts', sa.Integer(), server_default='0', nullable=False),
        sa.PrimaryKeyConstraint('email'),
    )
    op.create_index(op.f('ix_otp_challenges_created_at'), 'otp_challenges', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema - drop users and password reset challenges."""
    op.drop_index(op.f('ix_otp_challenges_created_at'), table_name='otp_challenges')
    op.drop_table('otp_challenges')
    op.drop_table('users')
