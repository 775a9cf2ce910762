"""content_store

Revision ID: 3f1c2a9d0b41
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d0b41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'pages',
        sa.Column('id',          sa.Integer(),               primary_key=True, autoincrement=True),
        sa.Column('parent_id',   sa.Integer(),               sa.ForeignKey('pages.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name',        sa.String(length=255),      nullable=False),
        sa.Column('url_segment', sa.String(length=255),      nullable=False, server_default=''),
        sa.Column('published',   sa.Boolean(),               nullable=False, server_default='0'),
        sa.Column('created_at',  sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at',  sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_pages_parent_id', 'pages', ['parent_id'])
    op.create_index('ix_pages_published', 'pages', ['published'])

    op.create_table(
        'page_cultures',
        sa.Column('id',      sa.Integer(),          primary_key=True, autoincrement=True),
        sa.Column('page_id', sa.Integer(),          sa.ForeignKey('pages.id', ondelete='CASCADE'), nullable=False),
        sa.Column('culture', sa.String(length=16),  nullable=False),
        sa.Column('name',    sa.String(length=255), nullable=False, server_default=''),
        sa.UniqueConstraint('page_id', 'culture', name='uq_page_cultures_page_culture'),
    )
    op.create_index('ix_page_cultures_page_id', 'page_cultures', ['page_id'])

    op.create_table(
        'domains',
        sa.Column('id',         sa.Integer(),          primary_key=True, autoincrement=True),
        sa.Column('page_id',    sa.Integer(),          sa.ForeignKey('pages.id', ondelete='CASCADE'), nullable=False),
        sa.Column('hostname',   sa.String(length=255), nullable=False),
        sa.Column('culture',    sa.String(length=16),  nullable=False),
        sa.Column('sort_order', sa.Integer(),          nullable=False, server_default='0'),
        sa.UniqueConstraint('hostname', name='uq_domains_hostname'),
    )
    op.create_index('ix_domains_page_id', 'domains', ['page_id'])


def downgrade() -> None:
    op.drop_index('ix_domains_page_id', table_name='domains')
    op.drop_table('domains')
    op.drop_index('ix_page_cultures_page_id', table_name='page_cultures')
    op.drop_table('page_cultures')
    op.drop_index('ix_pages_published', table_name='pages')
    op.drop_index('ix_pages_parent_id', table_name='pages')
    op.drop_table('pages')
