"""create workout and progression tables

Revision ID: 0001_progression_schema
Revises:
Create Date: 2026-02-02 18:04:11.120433

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_progression_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        _created_at(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("muscle_groups", sa.JSON(), nullable=False),
        _created_at(),
    )

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        _created_at(),
        sa.Column("targets_updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_workout_templates_user_id", "workout_templates", ["user_id"])

    op.create_table(
        "workout_template_exercises",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "template_id", sa.Integer(), sa.ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
    )
    op.create_index("ix_workout_template_exercises_template_id", "workout_template_exercises", ["template_id"])
    op.create_index("ix_workout_template_exercises_exercise_id", "workout_template_exercises", ["exercise_id"])

    op.create_table(
        "workout_template_sets",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "template_exercise_id",
            sa.Integer(),
            sa.ForeignKey("workout_template_exercises.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("set_number", sa.Integer(), nullable=False),
        sa.Column("target_reps", sa.Integer(), nullable=False),
        sa.Column("target_weight_kg", sa.Float(), nullable=True),
        _created_at(),
    )
    op.create_index(
        "ix_workout_template_sets_template_exercise_id", "workout_template_sets", ["template_exercise_id"]
    )

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "source_template_id",
            sa.Integer(),
            sa.ForeignKey("workout_templates.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="in_progress"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("title", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_workout_sessions_id", "workout_sessions", ["id"])
    op.create_index("ix_workout_sessions_user_id", "workout_sessions", ["user_id"])
    op.create_index("ix_workout_sessions_status", "workout_sessions", ["status"])
    op.create_index("ix_workout_sessions_source_template_id", "workout_sessions", ["source_template_id"])
    op.create_index("ix_workout_sessions_completed_at", "workout_sessions", ["completed_at"])

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "session_id", sa.Integer(), sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column(
            "source_template_exercise_id",
            sa.Integer(),
            sa.ForeignKey("workout_template_exercises.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _created_at(),
    )
    op.create_index("ix_workout_exercises_session_id", "workout_exercises", ["session_id"])
    op.create_index("ix_workout_exercises_exercise_id", "workout_exercises", ["exercise_id"])
    op.create_index(
        "ix_workout_exercises_source_template_exercise_id", "workout_exercises", ["source_template_exercise_id"]
    )

    op.create_table(
        "workout_sets",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "workout_exercise_id",
            sa.Integer(),
            sa.ForeignKey("workout_exercises.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("set_number", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("target_reps", sa.Integer(), nullable=False),
        sa.Column("target_weight_kg", sa.Float(), nullable=True),
        sa.Column("actual_reps", sa.Integer(), nullable=True),
        sa.Column("actual_weight_kg", sa.Float(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_workout_sets_workout_exercise_id", "workout_sets", ["workout_exercise_id"])

    op.create_table(
        "progression_suggestions",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "session_id", sa.Integer(), sa.ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("exercise_id", sa.Integer(), sa.ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False),
        sa.Column("suggestion_type", sa.String(length=20), nullable=False),
        sa.Column("current_value", sa.Float(), nullable=False),
        sa.Column("suggested_value", sa.Float(), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        _created_at(),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("session_id", "exercise_id", name="uq_progression_suggestions_session_exercise"),
    )
    op.create_index("ix_progression_suggestions_user_id", "progression_suggestions", ["user_id"])
    op.create_index("ix_progression_suggestions_session_id", "progression_suggestions", ["session_id"])
    op.create_index("ix_progression_suggestions_exercise_id", "progression_suggestions", ["exercise_id"])
    op.create_index("ix_progression_suggestions_status", "progression_suggestions", ["status"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("progression_suggestions")
    op.drop_table("workout_sets")
    op.drop_table("workout_exercises")
    op.drop_table("workout_sessions")
    op.drop_table("workout_template_sets")
    op.drop_table("workout_template_exercises")
    op.drop_table("workout_templates")
    op.drop_table("exercises")
    op.drop_table("users")
