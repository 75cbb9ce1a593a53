"""Initial content schema

Revision ID: content_schema_001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = 'content_schema_001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade():
    bind = op.get_bind()
    dialect = bind.dialect.name
    json_type = postgresql.JSONB(astext_type=sa.Text()) if dialect == 'postgresql' else sa.JSON()

    op.create_table(
        'user',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=6), nullable=False, server_default='EDITOR'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'category',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('name_en', sa.String(length=255), nullable=False),
        sa.Column('name_ar', sa.String(length=255), nullable=True),
        sa.Column('description_en', sa.Text(), nullable=True),
        sa.Column('description_ar', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('color', sa.String(length=32), nullable=True),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('parent_id', sa.String(length=36), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['parent_id'], ['category.id']),
    )
    op.create_index('ix_category_slug', 'category', ['slug'], unique=True)
    op.create_index('ix_category_parent_id', 'category', ['parent_id'])
    op.create_index('ix_category_enabled_sort', 'category', ['enabled', 'sort_order'])

    op.create_table(
        'resource',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('slug', sa.String(length=600), nullable=False),
        sa.Column('title_en', sa.String(length=500), nullable=False),
        sa.Column('title_ar', sa.String(length=500), nullable=True),
        sa.Column('description_en', sa.Text(), nullable=True),
        sa.Column('description_ar', sa.Text(), nullable=True),
        sa.Column('content_en', sa.Text(), nullable=True),
        sa.Column('content_ar', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=12), nullable=False, server_default='REPORT'),
        sa.Column('status', sa.String(length=9), nullable=False, server_default='DRAFT'),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('publisher', sa.String(length=255), nullable=True),
        sa.Column('publish_date', sa.Date(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('external_url', sa.String(length=1024), nullable=True),
        sa.Column('tags', json_type, nullable=True),
        sa.Column('category_id', sa.String(length=36), nullable=True),
        sa.Column('file_url', sa.String(length=1024), nullable=True),
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('file_mime_type', sa.String(length=128), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=1024), nullable=True),
        sa.Column('meta_title_en', sa.String(length=500), nullable=True),
        sa.Column('meta_title_ar', sa.String(length=500), nullable=True),
        sa.Column('meta_desc_en', sa.String(length=1000), nullable=True),
        sa.Column('meta_desc_ar', sa.String(length=1000), nullable=True),
        sa.Column('created_by_id', sa.String(length=36), nullable=True),
        sa.Column('updated_by_id', sa.String(length=36), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['category_id'], ['category.id']),
        sa.ForeignKeyConstraint(['created_by_id'], ['user.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['updated_by_id'], ['user.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_resource_slug', 'resource', ['slug'], unique=True)
    op.create_index('ix_resource_category_id', 'resource', ['category_id'])
    op.create_index('ix_resource_created_by_id', 'resource', ['created_by_id'])
    op.create_index('ix_resource_status_published', 'resource', ['status', 'published_at'])
    op.create_index('ix_resource_featured_priority', 'resource', ['featured', 'priority'])

    op.create_table(
        'page',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title_en', sa.String(length=500), nullable=False),
        sa.Column('title_ar', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=9), nullable=False, server_default='DRAFT'),
        sa.Column('template', sa.String(length=64), nullable=False, server_default='default'),
        sa.Column('show_in_nav', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('content_en', sa.Text(), nullable=True),
        sa.Column('content_ar', sa.Text(), nullable=True),
        sa.Column('blocks_en', json_type, nullable=True),
        sa.Column('blocks_ar', json_type, nullable=True),
        sa.Column('meta_title_en', sa.String(length=500), nullable=True),
        sa.Column('meta_title_ar', sa.String(length=500), nullable=True),
        sa.Column('meta_desc_en', sa.String(length=1000), nullable=True),
        sa.Column('meta_desc_ar', sa.String(length=1000), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_page_slug', 'page', ['slug'], unique=True)
    op.create_index('ix_page_status_sort', 'page', ['status', 'sort_order'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('action', sa.String(length=9), nullable=False),
        sa.Column('entity_type', sa.String(length=128), nullable=False),
        sa.Column('entity_id', sa.String(length=80), nullable=True),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('details', json_type, nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_audit_log_user_id', 'audit_log', ['user_id'])
    op.create_index('ix_audit_log_entity', 'audit_log', ['entity_type', 'entity_id'])
    op.create_index('ix_audit_log_created', 'audit_log', ['created_at'])

    op.create_table(
        'link_check',
        sa.Column('id', sa.String(length=80), nullable=False),
        *_timestamps(),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status_text', sa.String(length=255), nullable=True),
        sa.Column('source_type', sa.String(length=64), nullable=False),
        sa.Column('source_id', sa.String(length=36), nullable=False),
        sa.Column('is_broken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_checked', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_link_check_source_id', 'link_check', ['source_id'])

    op.create_table(
        'file_upload',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.Column('original_name', sa.String(length=255), nullable=False),
        sa.Column('storage_path', sa.String(length=512), nullable=False),
        sa.Column('url', sa.String(length=1024), nullable=False),
        sa.Column('mime_type', sa.String(length=128), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('uploaded_by_id', sa.String(length=36), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('storage_path'),
        sa.ForeignKeyConstraint(['uploaded_by_id'], ['user.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_file_upload_uploaded_by_id', 'file_upload', ['uploaded_by_id'])


def downgrade():
    op.drop_index('ix_file_upload_uploaded_by_id', table_name='file_upload')
    op.drop_table('file_upload')

    op.drop_index('ix_link_check_source_id', table_name='link_check')
    op.drop_table('link_check')

    op.drop_index('ix_audit_log_created', table_name='audit_log')
    op.drop_index('ix_audit_log_entity', table_name='audit_log')
    op.drop_index('ix_audit_log_user_id', table_name='audit_log')
    op.drop_table('audit_log')

    op.drop_index('ix_page_status_sort', table_name='page')
    op.drop_index('ix_page_slug', table_name='page')
    op.drop_table('page')

    op.drop_index('ix_resource_featured_priority', table_name='resource')
    op.drop_index('ix_resource_status_published', table_name='resource')
    op.drop_index('ix_resource_created_by_id', table_name='resource')
    op.drop_index('ix_resource_category_id', table_name='resource')
    op.drop_index('ix_resource_slug', table_name='resource')
    op.drop_table('resource')

    op.drop_index('ix_category_enabled_sort', table_name='category')
    op.drop_index('ix_category_parent_id', table_name='category')
    op.drop_index('ix_category_slug', table_name='category')
    op.drop_table('category')

    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
