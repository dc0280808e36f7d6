"""create_offering_document_tables

Revision ID: a1c0d0c5f001
Revises:
Create Date: 2026-10-19

Offering and organization_member (read by the access gate), document
(one row per offering and content hash) and the append-only audit_log.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c0d0c5f001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create offering, organization_member, document and audit_log."""
    op.create_table(
        "offering",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_offering_organization_id", "offering", ["organization_id"])

    op.create_table(
        "organization_member",
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("organization_id", "user_id"),
        sa.CheckConstraint(
            "role IN ('viewer', 'editor', 'manager', 'owner')",
            name="ck_organization_member_role",
        ),
    )
    op.create_index("ix_organization_member_user_id", "organization_member", ["user_id"])

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("offering_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=False),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("visibility", sa.String(), nullable=False),
        sa.Column("storage_key", sa.String(), nullable=False),
        sa.Column("checksum_sha256", sa.String(length=64), nullable=False),
        sa.Column("download_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("uploaded_by", sa.String(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["offering_id"], ["offering.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "category IN ('Financial', 'Appraisal', 'Legal', 'Technical', 'Other')",
            name="ck_document_category",
        ),
        sa.CheckConstraint("visibility IN ('Public', 'Private')", name="ck_document_visibility"),
        sa.CheckConstraint("download_count >= 0", name="ck_document_download_count"),
    )
    op.create_index("ix_document_offering_id", "document", ["offering_id"])
    op.create_index("ix_document_category", "document", ["category"])
    op.create_index("ix_document_uploaded_by", "document", ["uploaded_by"])
    op.create_index("ix_document_offering_uploaded_at", "document", ["offering_id", "uploaded_at"])
    op.create_index("ix_document_offering_storage_key", "document", ["offering_id", "storage_key"])
    op.create_index(
        "uq_document_offering_checksum",
        "document",
        ["offering_id", "checksum_sha256"],
        unique=True,
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("resource_type", sa.String(), nullable=False),
        sa.Column("resource_id", sa.String(), nullable=True),
        sa.Column("offering_id", sa.String(), nullable=True),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("request_id", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_log_user_id", "audit_log", ["user_id"])
    op.create_index("ix_audit_log_resource", "audit_log", ["resource_type", "resource_id"])
    op.create_index("ix_audit_log_offering_timestamp", "audit_log", ["offering_id", "timestamp"])


def downgrade() -> None:
    """Drop audit_log, document, organization_member and offering."""
    op.drop_index("ix_audit_log_offering_timestamp", table_name="audit_log")
    op.drop_index("ix_audit_log_resource", table_name="audit_log")
    op.drop_index("ix_audit_log_user_id", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("uq_document_offering_checksum", table_name="document")
    op.drop_index("ix_document_offering_storage_key", table_name="document")
    op.drop_index("ix_document_offering_uploaded_at", table_name="document")
    op.drop_index("ix_document_uploaded_by", table_name="document")
    op.drop_index("ix_document_category", table_name="document")
    op.drop_index("ix_document_offering_id", table_name="document")
    op.drop_table("document")
    op.drop_index("ix_organization_member_user_id", table_name="organization_member")
    op.drop_table("organization_member")
    op.drop_index("ix_offering_organization_id", table_name="offering")
    op.drop_table("offering")
