"""Create consultants, consultations and scores tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'consultants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # Email is the consultant identity and the upsert conflict target
    op.create_unique_constraint('uq_consultants_email', 'consultants', ['email'])

    op.create_table(
        'consultations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('consultant_id', sa.Uuid(), nullable=False),
        sa.Column('audio_url', sa.Text(), nullable=False),
        sa.Column('transcript', sa.Text(), nullable=True),
        sa.Column('email_source', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['consultant_id'], ['consultants.id'], ondelete='RESTRICT'),
    )

    # Dashboard lists newest first
    op.create_index('ix_consultations_created_at', 'consultations', ['created_at'])
    op.create_index('ix_consultations_consultant_id', 'consultations', ['consultant_id'])

    op.create_table(
        'scores',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('consultation_id', sa.Uuid(), nullable=False),
        sa.Column('category', sa.Text(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['consultation_id'], ['consultations.id'], ondelete='CASCADE'),
        sa.CheckConstraint('score >= 0 AND score <= 100', name='ck_scores_score_range'),
    )


def downgrade():
    op.drop_table('scores')
    op.drop_index('ix_consultations_consultant_id', table_name='consultations')
    op.drop_index('ix_consultations_created_at', table_name='consultations')
    op.drop_table('consultations')
    op.drop_constraint('uq_consultants_email', 'consultants', type_='unique')
    op.drop_table('consultants')
