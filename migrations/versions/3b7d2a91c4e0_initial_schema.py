"""Initial schema: recipes, meal plans, grocery lists, pantry, settings

Revision ID: 3b7d2a91c4e0
Revises:
Create Date: 2026-10-17 09:12:44.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7d2a91c4e0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'recipe',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('source_url', sa.String(length=500), nullable=True),
        sa.Column('total_time', sa.Integer(), nullable=True),
        sa.Column('active_cook_time', sa.Integer(), nullable=True),
        sa.Column('pots_and_pans', sa.Integer(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('gf_status', sa.String(length=20), nullable=False),
        sa.Column('gf_notes', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('favorite', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_gf_status'), ['gf_status'], unique=False)

    op.create_table(
        'recipe_ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.String(length=50), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.String(length=2000), nullable=True),
        sa.Column('is_gluten_flag', sa.Boolean(), nullable=False),
        sa.Column('gf_substitute', sa.String(length=200), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe_ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_ingredient_recipe_id'), ['recipe_id'], unique=False)

    op.create_table(
        'recipe_tag',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('value', sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('recipe_tag', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_tag_recipe_id'), ['recipe_id'], unique=False)

    op.create_table(
        'meal_plan',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('week_start', sa.Date(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=True),
        sa.Column('custom_meal_name', sa.String(length=200), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('week_start', 'day_of_week', name='uq_meal_plan_week_day'),
    )
    with op.batch_alter_table('meal_plan', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_meal_plan_week_start'), ['week_start'], unique=False)
        batch_op.create_index(batch_op.f('ix_meal_plan_recipe_id'), ['recipe_id'], unique=False)

    op.create_table(
        'grocery_list',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('week_start', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('grocery_list', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_grocery_list_week_start'), ['week_start'], unique=True)

    op.create_table(
        'grocery_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('list_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('quantity', sa.String(length=200), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=True),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('is_pantry_check', sa.Boolean(), nullable=False),
        sa.Column('is_manual', sa.Boolean(), nullable=False),
        sa.Column('is_quick_trip', sa.Boolean(), nullable=False),
        sa.Column('is_checked', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['list_id'], ['grocery_list.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('grocery_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_grocery_item_list_id'), ['list_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_grocery_item_is_manual'), ['is_manual'], unique=False)

    op.create_table(
        'pantry_staple',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('pantry_staple', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_pantry_staple_name'), ['name'], unique=True)

    op.create_table(
        'household_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('key', sa.String(length=50), nullable=False),
        sa.Column('value', sa.String(length=200), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )


def downgrade():
    op.drop_table('household_settings')
    with op.batch_alter_table('pantry_staple', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_pantry_staple_name'))
    op.drop_table('pantry_staple')
    with op.batch_alter_table('grocery_item', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_grocery_item_is_manual'))
        batch_op.drop_index(batch_op.f('ix_grocery_item_list_id'))
    op.drop_table('grocery_item')
    with op.batch_alter_table('grocery_list', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_grocery_list_week_start'))
    op.drop_table('grocery_list')
    with op.batch_alter_table('meal_plan', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_meal_plan_recipe_id'))
        batch_op.drop_index(batch_op.f('ix_meal_plan_week_start'))
    op.drop_table('meal_plan')
    with op.batch_alter_table('recipe_tag', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_tag_recipe_id'))
    op.drop_table('recipe_tag')
    with op.batch_alter_table('recipe_ingredient', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_ingredient_recipe_id'))
    op.drop_table('recipe_ingredient')
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_gf_status'))
        batch_op.drop_index(batch_op.f('ix_recipe_name'))
    op.drop_table('recipe')
