"""Add photos table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002'
down_revision = '0001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('image_path', sa.String(length=255), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE')
    )
    op.create_index('idx_photos_account_id', 'photos', ['account_id'])
    op.create_index('idx_photos_uploaded_at', 'photos', ['uploaded_at'])


def downgrade() -> None:
    op.drop_index('idx_photos_uploaded_at', table_name='photos')
    op.drop_index('idx_photos_account_id', table_name='photos')
    op.drop_table('photos')
