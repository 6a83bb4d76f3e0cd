"""Initial schema: users, documents, folders, github_repos, reviews

Revision ID: 3c1f9a6e2b70
Revises: 
Create Date: 2026-10-17 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f9a6e2b70"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    is_postgresql = bind.dialect.name == "postgresql"
    is_sqlite = bind.dialect.name == "sqlite"

    # Use JSONB for PostgreSQL, JSON for SQLite
    if is_postgresql:
        json_type = postgresql.JSONB(astext_type=sa.Text())
    else:
        json_type = sa.JSON()

    if is_sqlite:
        now_default = sa.text("(datetime('now'))")
    else:
        now_default = sa.text("now()")
    timestamp_type = sa.DateTime(timezone=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="editor"),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column("created_at", timestamp_type, server_default=now_default, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("path", sa.String(length=1000), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="draft"),
        sa.Column("author_id", sa.String(length=255), nullable=False),
        sa.Column("last_editor_id", sa.String(length=255), nullable=True),
        sa.Column("reviewer_id", sa.String(length=255), nullable=True),
        sa.Column("review_comments", sa.Text(), nullable=True),
        sa.Column("github_path", sa.String(length=1000), nullable=True),
        sa.Column("github_sha", sa.String(length=64), nullable=True),
        sa.Column("metadata", json_type, nullable=True),
        sa.Column("created_at", timestamp_type, server_default=now_default, nullable=False),
        sa.Column("updated_at", timestamp_type, server_default=now_default, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_documents_title"), "documents", ["title"], unique=False)
    op.create_index(op.f("ix_documents_path"), "documents", ["path"], unique=True)
    op.create_index(op.f("ix_documents_status"), "documents", ["status"], unique=False)

    op.create_table(
        "folders",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("path", sa.String(length=1000), nullable=False),
        sa.Column("parent_path", sa.String(length=1000), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", timestamp_type, server_default=now_default, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("path"),
    )
    op.create_index(op.f("ix_folders_parent_path"), "folders", ["parent_path"], unique=False)

    op.create_table(
        "github_repos",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("branch", sa.String(length=255), nullable=False, server_default="main"),
        sa.Column("token_env", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", timestamp_type, server_default=now_default, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_github_repos_is_active"), "github_repos", ["is_active"], unique=False)

    # No foreign key to documents: reviews survive document deletion
    op.create_table(
        "reviews",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("document_id", sa.String(length=255), nullable=False),
        sa.Column("reviewer_id", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("changes", json_type, nullable=True),
        sa.Column("created_at", timestamp_type, server_default=now_default, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_reviews_document_id"), "reviews", ["document_id"], unique=False)
    op.create_index(op.f("ix_reviews_reviewer_id"), "reviews", ["reviewer_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_reviews_reviewer_id"), table_name="reviews")
    op.drop_index(op.f("ix_reviews_document_id"), table_name="reviews")
    op.drop_index(op.f("ix_github_repos_is_active"), table_name="github_repos")
    op.drop_index(op.f("ix_folders_parent_path"), table_name="folders")
    op.drop_index(op.f("ix_documents_status"), table_name="documents")
    op.drop_index(op.f("ix_documents_path"), table_name="documents")
    op.drop_index(op.f("ix_documents_title"), table_name="documents")

    op.drop_table("reviews")
    op.drop_table("github_repos")
    op.drop_table("folders")
    op.drop_table("documents")
    op.drop_table("users")
