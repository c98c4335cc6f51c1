"""
Initial clubhouse schema.

Creates events, event_documents, yacht_classes, races, race_results and
stories with their indexes. Deleting an event cascades to its races, results
and documents; stories keep existing with event_id set to NULL.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'initial_schema_20250101'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('location', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_events_start_date', 'events', ['start_date'])
    op.create_index('idx_events_event_type', 'events', ['event_type'])

    op.create_table(
        'event_documents',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('document_name', sa.String(length=255), nullable=False),
        sa.Column('document_type', sa.String(length=50), nullable=False, server_default='general'),
        sa.Column('file_url', sa.Text(), nullable=False),
        sa.Column('file_size_bytes', sa.Integer(), nullable=True),
        sa.Column('mime_type', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_event_documents_event_id', 'event_documents', ['event_id'])

    op.create_table(
        'yacht_classes',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'races',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('yacht_class_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('yacht_classes.id'), nullable=False),
        sa.Column('race_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('race_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('wind_direction', sa.String(length=100), nullable=True),
        sa.Column('wind_speed', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_races_event_id', 'races', ['event_id'])

    op.create_table(
        'race_results',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('race_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('races.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sail_number', sa.String(length=20), nullable=False),
        sa.Column('yacht_name', sa.String(length=100), nullable=True),
        sa.Column('helm_name', sa.String(length=100), nullable=True),
        sa.Column('crew_names', sa.Text(), nullable=True),
        sa.Column('finish_time', sa.Time(), nullable=True),
        sa.Column('elapsed_time', sa.String(length=20), nullable=True),
        sa.Column('corrected_time', sa.String(length=20), nullable=True),
        sa.Column('position', sa.Integer(), nullable=True),
        sa.Column('points', sa.Integer(), nullable=True),
        sa.Column('disqualified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('dns', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('dnf', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('retired', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_race_results_race_id', 'race_results', ['race_id'])

    op.create_table(
        'stories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=350), nullable=False, unique=True),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('story_type', sa.String(length=50), nullable=False, server_default='news'),
        sa.Column('featured_image_url', sa.Text(), nullable=True),
        sa.Column('gallery_images', postgresql.JSONB(), nullable=True),
        sa.Column('author_name', sa.String(length=100), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('publish_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('tags', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_stories_published_publish_date', 'stories', ['published', 'publish_date'])
    op.create_index('idx_stories_story_type', 'stories', ['story_type'])


def downgrade() -> None:
    op.drop_index('idx_stories_story_type', table_name='stories')
    op.drop_index('idx_stories_published_publish_date', table_name='stories')
    op.drop_table('stories')
    op.drop_index('idx_race_results_race_id', table_name='race_results')
    op.drop_table('race_results')
    op.drop_index('idx_races_event_id', table_name='races')
    op.drop_table('races')
    op.drop_table('yacht_classes')
    op.drop_index('idx_event_documents_event_id', table_name='event_documents')
    op.drop_table('event_documents')
    op.drop_index('idx_events_event_type', table_name='events')
    op.drop_index('idx_events_start_date', table_name='events')
    op.drop_table('events')
