# mypy: ignore-errors
"""
Migration Alembic initiale du Record Store.

Crée les tables person, astronaut_detail, astronaut_duty et log.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Crée les tables du Record Store et leurs contraintes."""
    op.create_table(
        "person",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("name_key", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("name_key", name="uq_person_name_key"),
    )
    op.create_table(
        "astronaut_detail",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.id"), nullable=False, unique=True),
        sa.Column("current_rank", sa.String(length=255), nullable=False),
        sa.Column("current_duty_title", sa.String(length=255), nullable=False),
        sa.Column("career_start_date", sa.DateTime(), nullable=False),
        sa.Column("career_end_date", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "astronaut_duty",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.id"), nullable=False),
        sa.Column("rank", sa.String(length=255), nullable=False),
        sa.Column("duty_title", sa.String(length=255), nullable=False),
        sa.Column("duty_start_date", sa.DateTime(), nullable=False),
        sa.Column("duty_end_date", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_astronaut_duty_person_id", "astronaut_duty", ["person_id"])
    op.create_table(
        "log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("request_response_name", sa.String(length=255), nullable=False),
        sa.Column("request_identifier", sa.String(length=64), nullable=False),
        sa.Column("log_message", sa.String(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("elapsed_time_in_millis", sa.BigInteger(), nullable=True),
    )


def downgrade() -> None:
    """Supprime les tables créées par `upgrade`."""
    op.drop_table("log")
    op.drop_index("ix_astronaut_duty_person_id", table_name="astronaut_duty")
    op.drop_table("astronaut_duty")
    op.drop_table("astronaut_detail")
    op.drop_table("person")
