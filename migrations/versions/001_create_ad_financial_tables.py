"""create_ad_financial_tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:12:41.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('ad_financial_scenarios',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('is_default', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ad_financial_scenarios_name'), 'ad_financial_scenarios', ['name'], unique=False)

    op.create_table('ad_financial_assumptions',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('scenario_id', sa.Uuid(), nullable=False),
    sa.Column('starting_creators', sa.Float(), nullable=False),
    sa.Column('monthly_creator_growth', sa.Float(), nullable=False),
    sa.Column('percent_creators_monetized', sa.Float(), nullable=False),
    sa.Column('episodes_per_creator_per_month', sa.Float(), nullable=False),
    sa.Column('listens_per_episode', sa.Float(), nullable=False),
    sa.Column('ad_slots_per_listen', sa.Float(), nullable=False),
    sa.Column('fill_rate', sa.Float(), nullable=False),
    sa.Column('share_preroll', sa.Float(), nullable=False),
    sa.Column('share_midroll', sa.Float(), nullable=False),
    sa.Column('share_postroll', sa.Float(), nullable=False),
    sa.Column('cpm_preroll', sa.Float(), nullable=False),
    sa.Column('cpm_midroll', sa.Float(), nullable=False),
    sa.Column('cpm_postroll', sa.Float(), nullable=False),
    sa.Column('starting_campaigns', sa.Float(), nullable=False),
    sa.Column('monthly_campaign_growth', sa.Float(), nullable=False),
    sa.Column('avg_campaign_monthly_budget', sa.Float(), nullable=False),
    sa.Column('creator_rev_share', sa.Float(), nullable=False),
    sa.Column('platform_variable_cost_pct', sa.Float(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['scenario_id'], ['ad_financial_scenarios.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ad_financial_assumptions_id'), 'ad_financial_assumptions', ['id'], unique=False)
    op.create_index(op.f('ix_ad_financial_assumptions_scenario_id'), 'ad_financial_assumptions', ['scenario_id'], unique=True)

    op.create_table('ad_financial_projections',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('scenario_id', sa.Uuid(), nullable=False),
    sa.Column('month_index', sa.Integer(), nullable=False),
    sa.Column('period_start', sa.Date(), nullable=False),
    sa.Column('period_end', sa.Date(), nullable=False),
    sa.Column('creators', sa.BigInteger(), nullable=False),
    sa.Column('monetized_creators', sa.BigInteger(), nullable=False),
    sa.Column('episodes', sa.BigInteger(), nullable=False),
    sa.Column('total_listens', sa.BigInteger(), nullable=False),
    sa.Column('impressions_preroll', sa.BigInteger(), nullable=False),
    sa.Column('impressions_midroll', sa.BigInteger(), nullable=False),
    sa.Column('impressions_postroll', sa.BigInteger(), nullable=False),
    sa.Column('total_impressions', sa.BigInteger(), nullable=False),
    sa.Column('gross_revenue_preroll', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('gross_revenue_midroll', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('gross_revenue_postroll', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('gross_revenue_total', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('gross_revenue_unconstrained', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('active_campaigns', sa.BigInteger(), nullable=False),
    sa.Column('max_billable_revenue', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('constrained_gross_revenue', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('creator_payout', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('platform_variable_costs', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('platform_net_revenue', sa.Numeric(precision=16, scale=2), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['scenario_id'], ['ad_financial_scenarios.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('scenario_id', 'month_index', name='uq_projection_scenario_month')
    )
    op.create_index(op.f('ix_ad_financial_projections_scenario_id'), 'ad_financial_projections', ['scenario_id'], unique=False)

    op.create_table('ad_financial_model_summaries',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('scenario_id', sa.Uuid(), nullable=False),
    sa.Column('months', sa.Integer(), nullable=False),
    sa.Column('total_gross_revenue', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('total_platform_revenue', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('total_creator_payout', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('total_platform_variable_costs', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('total_impressions', sa.BigInteger(), nullable=False),
    sa.Column('average_cpm', sa.Numeric(precision=10, scale=2), nullable=False),
    sa.Column('year1_gross_revenue', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('year1_platform_revenue', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('year1_creator_payout', sa.Numeric(precision=18, scale=2), nullable=False),
    sa.Column('year1_impressions', sa.BigInteger(), nullable=False),
    sa.Column('summary_text', sa.Text(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['scenario_id'], ['ad_financial_scenarios.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ad_financial_model_summaries_id'), 'ad_financial_model_summaries', ['id'], unique=False)
    op.create_index(op.f('ix_ad_financial_model_summaries_scenario_id'), 'ad_financial_model_summaries', ['scenario_id'], unique=True)

    op.create_table('admin_revenue_reports',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('period_start', sa.Date(), nullable=False),
    sa.Column('period_end', sa.Date(), nullable=False),
    sa.Column('gross_revenue', sa.Numeric(precision=14, scale=2), nullable=False),
    sa.Column('net_revenue', sa.Numeric(precision=14, scale=2), nullable=False),
    sa.Column('refunds', sa.Numeric(precision=12, scale=2), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_admin_revenue_reports_id'), 'admin_revenue_reports', ['id'], unique=False)
    op.create_index(op.f('ix_admin_revenue_reports_period_start'), 'admin_revenue_reports', ['period_start'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_admin_revenue_reports_period_start'), table_name='admin_revenue_reports')
    op.drop_index(op.f('ix_admin_revenue_reports_id'), table_name='admin_revenue_reports')
    op.drop_table('admin_revenue_reports')
    op.drop_index(op.f('ix_ad_financial_model_summaries_scenario_id'), table_name='ad_financial_model_summaries')
    op.drop_index(op.f('ix_ad_financial_model_summaries_id'), table_name='ad_financial_model_summaries')
    op.drop_table('ad_financial_model_summaries')
    op.drop_index(op.f('ix_ad_financial_projections_scenario_id'), table_name='ad_financial_projections')
    op.drop_table('ad_financial_projections')
    op.drop_index(op.f('ix_ad_financial_assumptions_scenario_id'), table_name='ad_financial_assumptions')
    op.drop_index(op.f('ix_ad_financial_assumptions_id'), table_name='ad_financial_assumptions')
    op.drop_table('ad_financial_assumptions')
    op.drop_index(op.f('ix_ad_financial_scenarios_name'), table_name='ad_financial_scenarios')
    op.drop_table('ad_financial_scenarios')
