"""create_integration_credentials_table

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-01-15 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create integration_credentials table."""
    op.create_table(
        "integration_credentials",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # Resolution key
        sa.Column(
            "provider_type",
            sa.String(length=50),
            nullable=False,
            comment="Provider discriminator (e.g., 'mural')",
        ),
        sa.Column(
            "account_identifier",
            sa.String(length=255),
            nullable=False,
            comment="Tenant key, unique together with provider_type",
        ),
        # Credential payload
        sa.Column(
            "credentials",
            sa.JSON(),
            nullable=False,
            comment="Credential map (baseUrl, apiKey, transferApiKey, provider extras)",
        ),
        sa.Column(
            "expiry_date",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Credential expiry; NULL never expires",
        ),
        sa.Column("version", sa.String(length=50), nullable=True),
        sa.Column(
            "automatic_update",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        # Audit
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column("updated_by", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_integration_credentials_provider_account",
        "integration_credentials",
        ["provider_type", "account_identifier"],
        unique=True,
    )


def downgrade() -> None:
    """Drop integration_credentials table."""
    op.drop_index(
        "idx_integration_credentials_provider_account",
        table_name="integration_credentials",
    )
    op.drop_table("integration_credentials")
