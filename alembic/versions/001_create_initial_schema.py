"""create initial database schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')

subscription_type = sa.Enum('free', 'premium', name='subscription_type')
document_status = sa.Enum('draft', 'completed', 'trashed', name='document_status')
file_type = sa.Enum('pdf', 'doc', 'docx', name='file_type')
purchase_type = sa.Enum('subscription', 'individual_document', name='purchase_type')
payment_status = sa.Enum('pending', 'completed', 'failed', 'refunded', name='payment_status')


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('avatar_url', sa.String(1024), nullable=True),
        sa.Column('subscription_type', subscription_type, nullable=False, server_default='free'),
        sa.Column('subscription_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('trial_ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create template_categories table
    op.create_table(
        'template_categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon_url', sa.String(1024), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_template_categories_id', 'template_categories', ['id'])
    op.create_index('ix_template_categories_slug', 'template_categories', ['slug'], unique=True)
    op.create_index('ix_template_categories_sort_order', 'template_categories', ['sort_order'])

    # Create templates table
    op.create_table(
        'templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('template_data', JSON_TYPE, nullable=False),
        sa.Column('preview_url', sa.String(1024), nullable=True),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('downloads_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['category_id'], ['template_categories.id']),
    )
    op.create_index('ix_templates_id', 'templates', ['id'])
    op.create_index('ix_templates_category_id', 'templates', ['category_id'])
    op.create_index('ix_templates_is_premium', 'templates', ['is_premium'])

    # Create user_documents table
    op.create_table(
        'user_documents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('document_data', JSON_TYPE, nullable=False),
        sa.Column('file_url', sa.String(1024), nullable=True),
        sa.Column('file_type', file_type, nullable=True),
        sa.Column('status', document_status, nullable=False, server_default='draft'),
        sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['template_id'], ['templates.id']),
    )
    op.create_index('ix_user_documents_id', 'user_documents', ['id'])
    op.create_index('ix_user_documents_user_id', 'user_documents', ['user_id'])
    op.create_index('ix_user_documents_template_id', 'user_documents', ['template_id'])
    op.create_index('ix_user_documents_status', 'user_documents', ['status'])

    # Create purchases table
    op.create_table(
        'purchases',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('purchase_type', purchase_type, nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(10), nullable=False, server_default='EUR'),
        sa.Column('payment_status', payment_status, nullable=False, server_default='pending'),
        sa.Column('payment_provider', sa.String(50), nullable=True),
        sa.Column('payment_provider_id', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['template_id'], ['templates.id']),
    )
    op.create_index('ix_purchases_id', 'purchases', ['id'])
    op.create_index('ix_purchases_user_id', 'purchases', ['user_id'])
    op.create_index('ix_purchases_template_id', 'purchases', ['template_id'])
    op.create_index('ix_purchases_payment_provider_id', 'purchases', ['payment_provider_id'])


def downgrade() -> None:
    op.drop_index('ix_purchases_payment_provider_id', table_name='purchases')
    op.drop_index('ix_purchases_template_id', table_name='purchases')
    op.drop_index('ix_purchases_user_id', table_name='purchases')
    op.drop_index('ix_purchases_id', table_name='purchases')
    op.drop_table('purchases')

    op.drop_index('ix_user_documents_status', table_name='user_documents')
    op.drop_index('ix_user_documents_template_id', table_name='user_documents')
    op.drop_index('ix_user_documents_user_id', table_name='user_documents')
    op.drop_index('ix_user_documents_id', table_name='user_documents')
    op.drop_table('user_documents')

    op.drop_index('ix_templates_is_premium', table_name='templates')
    op.drop_index('ix_templates_category_id', table_name='templates')
    op.drop_index('ix_templates_id', table_name='templates')
    op.drop_table('templates')

    op.drop_index('ix_template_categories_sort_order', table_name='template_categories')
    op.drop_index('ix_template_categories_slug', table_name='template_categories')
    op.drop_index('ix_template_categories_id', table_name='template_categories')
    op.drop_table('template_categories')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    # Enums do PostgreSQL não são removidos junto com as tabelas
    bind = op.get_bind()
    for enum in (payment_status, purchase_type, file_type, document_status, subscription_type):
        enum.drop(bind, checkfirst=True)
