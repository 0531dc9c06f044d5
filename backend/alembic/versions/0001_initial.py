from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "match",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("date_played", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total_score", sa.Integer(), nullable=True),
        sa.Column("lane", sa.Integer(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_match_user_id", "match", ["user_id"])
    op.create_table(
        "frame",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "match_id",
            sa.String(),
            sa.ForeignKey("match.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("frame_number", sa.Integer(), nullable=False),
        sa.Column("first_shot", sa.Integer(), nullable=True),
        sa.Column("second_shot", sa.Integer(), nullable=True),
        sa.Column("third_shot", sa.Integer(), nullable=True),
        sa.Column("is_strike", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_spare", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pins_standing", sa.JSON(), nullable=False),
        sa.Column("running_total", sa.Integer(), nullable=True),
        sa.Column("line_drawing", sa.JSON(), nullable=True),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint(
            "match_id", "frame_number", name="uq_frame_match_id_frame_number"
        ),
    )


def downgrade():
    op.drop_table("frame")
    op.drop_index("ix_match_user_id", table_name="match")
    op.drop_table("match")
