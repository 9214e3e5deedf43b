"""0001 radio button data table

Revision ID: 0001_radio_button_data
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

from migrations.migration_helpers import index_exists, table_exists


# revision identifiers, used by Alembic.
revision = '0001_radio_button_data'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    if not table_exists('radio_button_data'):
        op.create_table(
            'radio_button_data',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('model_type', sa.String(length=128), nullable=False),
            sa.Column('model_id', sa.Integer(), nullable=False),
            sa.Column('data', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.UniqueConstraint('model_type', 'model_id', name='uq_radio_button_data_model'),
        )
    if not index_exists('radio_button_data', 'ix_radio_button_data_model_id'):
        op.create_index('ix_radio_button_data_model_id', 'radio_button_data', ['model_id'])


def downgrade():
    if index_exists('radio_button_data', 'ix_radio_button_data_model_id'):
        op.drop_index('ix_radio_button_data_model_id', table_name='radio_button_data')
    if table_exists('radio_button_data'):
        op.drop_table('radio_button_data')
