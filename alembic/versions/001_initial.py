"""Initial schema: config store, content lists, page settings, admin users

Revision ID: 001_initial
Revises:
Create Date: 2026-10-16
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'site_config',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('value', postgresql.JSONB(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_site_config_key', 'site_config', ['key'], unique=True)

    op.create_table(
        'admin_users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('session_token', sa.String(64), nullable=True),
        sa.Column('session_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admin_users_username', 'admin_users', ['username'], unique=True)
    op.create_index('ix_admin_users_session_token', 'admin_users', ['session_token'], unique=True)

    op.create_table(
        'testimonials',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('service', sa.String(255), nullable=False),
        sa.Column('testimonial', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('photo', sa.String(500), nullable=True),
        *_content_columns(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'faq_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        *_content_columns(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(100), nullable=False),
        sa.Column('gradient', sa.String(100), nullable=False),
        sa.Column('price', sa.String(100), nullable=True),
        sa.Column('duration', sa.String(100), nullable=True),
        sa.Column('show_price', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('show_duration', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_content_columns(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'specialties',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(100), nullable=False, server_default='Brain'),
        sa.Column('icon_color', sa.String(20), nullable=False, server_default='#ec4899'),
        *_content_columns(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'photo_carousel',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=False),
        sa.Column('show_text', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_content_columns(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'footer_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('general_info', postgresql.JSONB(), nullable=False),
        sa.Column('contact_buttons', postgresql.JSONB(), nullable=False),
        sa.Column('certification_items', postgresql.JSONB(), nullable=False),
        sa.Column('trust_seals', postgresql.JSONB(), nullable=False),
        sa.Column('bottom_info', postgresql.JSONB(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'contact_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('contact_items', postgresql.JSONB(), nullable=False),
        sa.Column('schedule_info', postgresql.JSONB(), nullable=False),
        sa.Column('location_info', postgresql.JSONB(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('contact_settings')
    op.drop_table('footer_settings')
    op.drop_table('photo_carousel')
    op.drop_table('specialties')
    op.drop_table('services')
    op.drop_table('faq_items')
    op.drop_table('testimonials')
    op.drop_index('ix_admin_users_session_token', table_name='admin_users')
    op.drop_index('ix_admin_users_username', table_name='admin_users')
    op.drop_table('admin_users')
    op.drop_index('ix_site_config_key', table_name='site_config')
    op.drop_table('site_config')
