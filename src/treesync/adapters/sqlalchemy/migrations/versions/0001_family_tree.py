"""Create family, family_member and family_relationship tables.

Revision ID: 0001_family_tree
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_family_tree"
down_revision = None
branch_labels = None
depends_on = None

_LINEAGE_TYPES = ("PATRIARCHAL", "MATRIARCHAL")
_GENDERS = ("MALE", "FEMALE", "OTHER")
_RELATIONSHIP_TYPES = ("PARENT", "SPOUSE", "SIBLING")


def upgrade() -> None:
    op.create_table(
        "family",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("group_id", sa.Uuid(), nullable=False),
        sa.Column(
            "lineage_type",
            sa.Enum(*_LINEAGE_TYPES, name="lineagetype", native_enum=False),
            nullable=True,
        ),
        sa.Column("synced_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_family"),
    )
    op.create_index("ix_family_group_id", "family", ["group_id"])

    op.create_table(
        "family_member",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("family_id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column(
            "gender",
            sa.Enum(*_GENDERS, name="gender", native_enum=False),
            nullable=False,
        ),
        sa.Column("generation", sa.Integer(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("date_of_death", sa.Date(), nullable=True),
        sa.Column("is_alive", sa.Boolean(), nullable=True),
        sa.Column("biography", sa.JSON(), nullable=True),
        sa.Column("position_x", sa.Float(), nullable=True),
        sa.Column("position_y", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(
            ["family_id"],
            ["family.id"],
            name="fk_family_member_family_id_family",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_family_member"),
    )
    op.create_index("ix_family_member_family_id", "family_member", ["family_id"])

    op.create_table(
        "family_relationship",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("family_id", sa.Uuid(), nullable=False),
        sa.Column("from_member_id", sa.Uuid(), nullable=False),
        sa.Column("to_member_id", sa.Uuid(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*_RELATIONSHIP_TYPES, name="relationshiptype", native_enum=False),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["family_id"],
            ["family.id"],
            name="fk_family_relationship_family_id_family",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["from_member_id"],
            ["family_member.id"],
            name="fk_family_relationship_from_member_id_family_member",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["to_member_id"],
            ["family_member.id"],
            name="fk_family_relationship_to_member_id_family_member",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_family_relationship"),
    )
    op.create_index("ix_family_relationship_family_id", "family_relationship", ["family_id"])


def downgrade() -> None:
    op.drop_index("ix_family_relationship_family_id", table_name="family_relationship")
    op.drop_table("family_relationship")
    op.drop_index("ix_family_member_family_id", table_name="family_member")
    op.drop_table("family_member")
    op.drop_index("ix_family_group_id", table_name="family")
    op.drop_table("family")
