"""create_qc_dashboard_tables

Revision ID: b4c1d2e3f4a5
Revises:
Create Date: 2026-03-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'b4c1d2e3f4a5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

binary_answer = sa.Enum('YES', 'NO', 'NOT_APPLICABLE', name='binaryanswer')
lead_status = sa.Enum('ACTIVE', 'PENDING', 'DEAD', name='leadstatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """
    Create agents, QC sessions with their answer rows, the archive,
    the objection/skill libraries and training examples.
    """
    op.create_table(
        'agents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_agents_id', 'agents', ['id'])

    op.create_table(
        'qc_agents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_qc_agents_id', 'qc_agents', ['id'])

    op.create_table(
        'qc_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('qc_agent_id', sa.Integer(), nullable=True),
        sa.Column('session_date', sa.Date(), nullable=False),
        sa.Column('call_date', sa.Date(), nullable=True),
        sa.Column('call_time', sa.String(length=10), nullable=True),
        sa.Column('property_address', sa.String(length=500), nullable=True),
        sa.Column('lead_status', lead_status, nullable=False),
        sa.Column('final_comment', sa.Text(), nullable=True),
        sa.Column('overall_score', sa.Float(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['agent_id'], ['agents.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['qc_agent_id'], ['qc_agents.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_qc_sessions_id', 'qc_sessions', ['id'])
    op.create_index('ix_qc_sessions_agent_id', 'qc_sessions', ['agent_id'])

    op.create_table(
        'binary_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('intro', binary_answer, nullable=False),
        sa.Column('first_ask', binary_answer, nullable=False),
        sa.Column('property_condition', binary_answer, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['session_id'], ['qc_sessions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id')
    )
    op.create_index('ix_binary_scores_id', 'binary_scores', ['id'])

    rating_columns = []
    for name in ('bonding_rapport', 'magic_problem', 'second_ask', 'objection_handling'):
        rating_columns += [
            sa.Column(name, sa.Integer(), nullable=True),
            sa.Column(f'{name}_comment', sa.Text(), nullable=True),
            sa.Column(f'{name}_skills', sa.JSON(), nullable=True),
        ]
    op.create_table(
        'category_scores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        *rating_columns,
        sa.Column('closing_offer_presentation', sa.Integer(), nullable=True),
        sa.Column('closing_offer_comment', sa.Text(), nullable=True),
        sa.Column('closing_motivation', sa.Integer(), nullable=True),
        sa.Column('closing_motivation_comment', sa.Text(), nullable=True),
        sa.Column('closing_objections', sa.Integer(), nullable=True),
        sa.Column('closing_objections_comment', sa.Text(), nullable=True),
        sa.Column('closing_skills', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['session_id'], ['qc_sessions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id')
    )
    op.create_index('ix_category_scores_id', 'category_scores', ['id'])

    op.create_table(
        'archived_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('original_session_id', sa.Integer(), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('qc_agent_id', sa.Integer(), nullable=True),
        sa.Column('overall_score', sa.Float(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('archived_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['agent_id'], ['agents.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['qc_agent_id'], ['qc_agents.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_archived_sessions_id', 'archived_sessions', ['id'])
    op.create_index('ix_archived_sessions_agent_id', 'archived_sessions', ['agent_id'])

    op.create_table(
        'objections_library',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('objection_text', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_objections_library_id', 'objections_library', ['id'])

    op.create_table(
        'skills_library',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('skill_text', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_skills_library_id', 'skills_library', ['id'])

    op.create_table(
        'training_examples',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agent_id', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('qc_comment', sa.Text(), nullable=True),
        sa.Column('property_address', sa.String(length=500), nullable=True),
        sa.Column('call_date', sa.Date(), nullable=True),
        sa.Column('call_time', sa.String(length=10), nullable=True),
        sa.Column('timestamp_start', sa.String(length=20), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['agent_id'], ['agents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_training_examples_id', 'training_examples', ['id'])
    op.create_index('ix_training_examples_agent_id', 'training_examples', ['agent_id'])


def downgrade() -> None:
    """Drop every QC dashboard table"""
    op.drop_table('training_examples')
    op.drop_table('skills_library')
    op.drop_table('objections_library')
    op.drop_table('archived_sessions')
    op.drop_table('category_scores')
    op.drop_table('binary_scores')
    op.drop_table('qc_sessions')
    op.drop_table('qc_agents')
    op.drop_table('agents')

    binary_answer.drop(op.get_bind(), checkfirst=True)
    lead_status.drop(op.get_bind(), checkfirst=True)
