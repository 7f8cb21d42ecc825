"""Initial schema: contacts, subscribers, projects, users

Revision ID: 3f1c2a9d7b4e
Revises:
Create Date: 2026-10-19 09:12:31.482107

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b4e"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

LEAD_SOURCE = ("WEBSITE", "EVENT", "REFERRAL", "SOCIAL_MEDIA", "OTHER")
ENUM_TYPES = (
    "contacttype",
    "experiencerange",
    "contactstatus",
    "priority",
    "leadsource",
    "projectcategory",
    "projectstatus",
    "userrole",
    "department",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "contacts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "type",
            sa.Enum("GENERAL", "CAREER", "PARTNERSHIP", name="contacttype"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("company", sa.String(length=100), nullable=True),
        sa.Column("subject", sa.String(length=200), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column(
            "experience",
            sa.Enum("JUNIOR", "MID", "SENIOR", "EXPERT", name="experiencerange"),
            nullable=True,
        ),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("resume", sa.JSON(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "NEW",
                "CONTACTED",
                "IN_PROGRESS",
                "RESOLVED",
                "SPAM",
                name="contactstatus",
            ),
            nullable=False,
        ),
        sa.Column(
            "priority",
            sa.Enum("LOW", "MEDIUM", "HIGH", name="priority"),
            nullable=False,
        ),
        sa.Column("notes", sa.JSON(), nullable=False),
        sa.Column("source", sa.Enum(*LEAD_SOURCE, name="leadsource"), nullable=False),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contacts_email"), "contacts", ["email"], unique=False)
    op.create_index(
        "ix_contacts_type_status", "contacts", ["type", "status"], unique=False
    )
    op.create_index("ix_contacts_created_at", "contacts", ["created_at"], unique=False)

    op.create_table(
        "subscribers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column(
            "source",
            postgresql.ENUM(*LEAD_SOURCE, name="leadsource", create_type=False),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("preferences", sa.JSON(), nullable=False),
        sa.Column("signup_metadata", sa.JSON(), nullable=True),
        sa.Column("last_engagement", sa.DateTime(), nullable=True),
        sa.Column("engagement_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("short_description", sa.String(length=300), nullable=True),
        sa.Column(
            "category",
            sa.Enum(
                "COMMERCIAL",
                "RESIDENTIAL",
                "INFRASTRUCTURE",
                "HEALTHCARE",
                "EDUCATION",
                "OTHER",
                name="projectcategory",
            ),
            nullable=False,
        ),
        sa.Column("location", sa.String(length=100), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "PLANNING",
                "IN_PROGRESS",
                "COMPLETED",
                "ON_HOLD",
                name="projectstatus",
            ),
            nullable=False,
        ),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("completion_date", sa.Date(), nullable=True),
        sa.Column("budget", sa.JSON(), nullable=True),
        sa.Column("size", sa.JSON(), nullable=True),
        sa.Column("client", sa.JSON(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("specifications", sa.JSON(), nullable=True),
        sa.Column("meta", sa.JSON(), nullable=True),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.String(length=64), nullable=False),
        sa.Column("updated_by", sa.String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_projects_slug"), "projects", ["slug"], unique=False)
    op.create_index(
        "ix_projects_category_status", "projects", ["category", "status"], unique=False
    )
    op.create_index(
        "ix_projects_featured_status", "projects", ["featured", "status"], unique=False
    )
    op.create_index(
        "ix_projects_status_completion",
        "projects",
        ["status", "completion_date"],
        unique=False,
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "MANAGER", "EDITOR", "VIEWER", name="userrole"),
            nullable=False,
        ),
        sa.Column(
            "department",
            sa.Enum(
                "MANAGEMENT",
                "CONSTRUCTION",
                "DESIGN",
                "HR",
                "MARKETING",
                name="department",
            ),
            nullable=True,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("profile", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_index("ix_projects_status_completion", table_name="projects")
    op.drop_index("ix_projects_featured_status", table_name="projects")
    op.drop_index("ix_projects_category_status", table_name="projects")
    op.drop_index(op.f("ix_projects_slug"), table_name="projects")
    op.drop_table("projects")
    op.drop_table("subscribers")
    op.drop_index("ix_contacts_created_at", table_name="contacts")
    op.drop_index("ix_contacts_type_status", table_name="contacts")
    op.drop_index(op.f("ix_contacts_email"), table_name="contacts")
    op.drop_table("contacts")
    if op.get_bind().dialect.name == "postgresql":
        for name in ENUM_TYPES:
            op.execute(f"DROP TYPE IF EXISTS {name}")
