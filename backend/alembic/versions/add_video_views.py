"""Add players and video_views tables

Revision ID: add_video_views
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


revision = 'add_video_views'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'players',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('position', sa.String(), nullable=False),
        sa.Column('position_fr', sa.String(), nullable=True),
        sa.Column('club', sa.String(), nullable=True),
        sa.Column('region', sa.String(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('video_url', sa.String(), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_players_id', 'players', ['id'])

    op.create_table(
        'video_views',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('player_id', sa.String(), nullable=False),
        sa.Column('session_id', sa.String(), nullable=False),
        sa.Column('viewer_id', sa.String(), nullable=True),
        sa.Column('viewer_email', sa.String(), nullable=True),
        sa.Column('viewer_name', sa.String(), nullable=True),
        sa.Column('watch_duration_seconds', sa.Float(), nullable=True),
        sa.Column('total_duration_seconds', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('player_id', 'session_id', name='unique_player_view_session')
    )
    op.create_index('ix_video_views_id', 'video_views', ['id'])
    op.create_index('ix_video_views_player_id', 'video_views', ['player_id'])
    op.create_index('ix_video_views_session_id', 'video_views', ['session_id'])


def downgrade():
    op.drop_index('ix_video_views_session_id', 'video_views')
    op.drop_index('ix_video_views_player_id', 'video_views')
    op.drop_index('ix_video_views_id', 'video_views')
    op.drop_table('video_views')
    op.drop_index('ix_players_id', 'players')
    op.drop_table('players')
