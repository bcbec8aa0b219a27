"""Initial schema: messages, reactions, translations, preferences, workouts

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'messages',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('sender', sa.String(1), nullable=False),
        sa.Column('type', sa.String(10), nullable=False, server_default='text'),
        sa.Column('text', sa.Text(), nullable=True),
        sa.Column('reply_to_id', sa.String(36), nullable=True),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['reply_to_id'], ['messages.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("sender IN ('A', 'B')", name='ck_messages_sender'),
        sa.CheckConstraint("type IN ('text', 'image', 'voice')", name='ck_messages_type'),
    )
    op.create_index('ix_messages_reply_to_id', 'messages', ['reply_to_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    op.create_table(
        'reactions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('message_id', sa.String(36), nullable=False),
        sa.Column('user_role', sa.String(1), nullable=False),
        sa.Column('emoji', sa.String(32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('message_id', 'user_role', 'emoji', name='uq_reactions_message_role_emoji'),
        sa.CheckConstraint("user_role IN ('A', 'B')", name='ck_reactions_user_role'),
    )
    op.create_index('ix_reactions_message_id', 'reactions', ['message_id'])

    # Translation cache, one row per message and language pair
    op.create_table(
        'translations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('message_id', sa.String(36), nullable=False),
        sa.Column('source_language', sa.String(10), nullable=False),
        sa.Column('target_language', sa.String(10), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'message_id', 'source_language', 'target_language',
            name='uq_translations_message_language_pair'
        ),
    )
    op.create_index('ix_translations_message_id', 'translations', ['message_id'])
    op.create_index('ix_translations_languages', 'translations', ['source_language', 'target_language'])

    op.create_table(
        'translation_preferences',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_role', sa.String(1), nullable=False),
        sa.Column('message_id', sa.String(36), nullable=False),
        sa.Column('show_original', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('target_language', sa.String(10), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_role', 'message_id', name='uq_translation_preferences_role_message'),
        sa.CheckConstraint("user_role IN ('A', 'B')", name='ck_translation_preferences_user_role'),
    )
    op.create_index('ix_translation_preferences_message_id', 'translation_preferences', ['message_id'])

    op.create_table(
        'workouts',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('exercise_name', sa.Text(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('per_set_weights', sa.JSON(), nullable=True),
        sa.Column('difficulty_rating', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('sets > 0', name='ck_workouts_sets_positive'),
        sa.CheckConstraint('reps > 0', name='ck_workouts_reps_positive'),
        sa.CheckConstraint('weight >= 0', name='ck_workouts_weight_non_negative'),
        sa.CheckConstraint(
            'difficulty_rating IS NULL OR (difficulty_rating BETWEEN 1 AND 10)',
            name='ck_workouts_difficulty_range'
        ),
    )
    op.create_index('ix_workouts_created_at', 'workouts', ['created_at'])


def downgrade():
    op.drop_index('ix_workouts_created_at', table_name='workouts')
    op.drop_table('workouts')
    op.drop_index('ix_translation_preferences_message_id', table_name='translation_preferences')
    op.drop_table('translation_preferences')
    op.drop_index('ix_translations_languages', table_name='translations')
    op.drop_index('ix_translations_message_id', table_name='translations')
    op.drop_table('translations')
    op.drop_index('ix_reactions_message_id', table_name='reactions')
    op.drop_table('reactions')
    op.drop_index('ix_messages_created_at', table_name='messages')
    op.drop_index('ix_messages_reply_to_id', table_name='messages')
    op.drop_table('messages')
