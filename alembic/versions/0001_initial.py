"""Initial campaign marketplace schema

This migration adds:
1. auth_identities table (identity provider credentials)
2. user_profiles table
3. advertiser_profiles / influencer_profiles tables
4. campaigns table
5. applications table, one row per (campaign, influencer)

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('advertiser', 'influencer', name='userroledb')
campaign_status = sa.Enum('recruiting', 'closed', 'selected', 'completed', name='campaignstatusdb')
application_status = sa.Enum('pending', 'selected', 'rejected', name='applicationstatusdb')


def upgrade():
    # 1. Identity provider store
    op.create_table('auth_identities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('user_metadata', sa.JSON),
        sa.Column('last_sign_in_at', sa.DateTime),
        sa.Column('created_at', sa.DateTime),
    )
    op.create_index('ix_auth_identities_email', 'auth_identities', ['email'], unique=True)

    # 2. Profiles
    op.create_table('user_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('terms_agreed', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )
    op.create_index('ix_user_profiles_email', 'user_profiles', ['email'], unique=True)

    op.create_table('advertiser_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user_profiles.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('business_name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('business_registration_number', sa.String(12), nullable=False),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    op.create_table('influencer_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user_profiles.id', ondelete='CASCADE'), unique=True, nullable=False),
        sa.Column('birth_date', sa.Date, nullable=False),
        sa.Column('naver_blog_name', sa.String(100)),
        sa.Column('naver_blog_url', sa.String(500)),
        sa.Column('youtube_name', sa.String(100)),
        sa.Column('youtube_url', sa.String(500)),
        sa.Column('instagram_name', sa.String(100)),
        sa.Column('instagram_url', sa.String(500)),
        sa.Column('threads_name', sa.String(100)),
        sa.Column('threads_url', sa.String(500)),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )

    # 3. Campaigns
    op.create_table('campaigns',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('advertiser_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('recruitment_start_date', sa.Date, nullable=False),
        sa.Column('recruitment_end_date', sa.Date, nullable=False),
        sa.Column('recruitment_count', sa.Integer, nullable=False),
        sa.Column('benefits', sa.Text, nullable=False),
        sa.Column('store_info', sa.Text, nullable=False),
        sa.Column('mission', sa.Text, nullable=False),
        sa.Column('status', campaign_status, nullable=False, server_default='recruiting'),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
    )
    op.create_index('ix_campaigns_advertiser_id', 'campaigns', ['advertiser_id'])
    op.create_index('ix_campaigns_status', 'campaigns', ['status'])
    op.create_index('ix_campaigns_created_at', 'campaigns', ['created_at'])

    # 4. Applications
    op.create_table('applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('campaign_id', sa.String(36), sa.ForeignKey('campaigns.id'), nullable=False),
        sa.Column('influencer_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('visit_date', sa.Date, nullable=False),
        sa.Column('status', application_status, nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime),
        sa.Column('updated_at', sa.DateTime),
        sa.UniqueConstraint('campaign_id', 'influencer_id', name='uq_applications_campaign_influencer'),
    )
    op.create_index('ix_applications_campaign_id', 'applications', ['campaign_id'])
    op.create_index('ix_applications_influencer_id', 'applications', ['influencer_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])
    op.create_index('ix_applications_created_at', 'applications', ['created_at'])


def downgrade():
    # Drop tables in reverse order
    op.drop_table('applications')
    op.drop_table('campaigns')
    op.drop_table('influencer_profiles')
    op.drop_table('advertiser_profiles')
    op.drop_table('user_profiles')
    op.drop_table('auth_identities')

    bind = op.get_bind()
    application_status.drop(bind, checkfirst=True)
    campaign_status.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
