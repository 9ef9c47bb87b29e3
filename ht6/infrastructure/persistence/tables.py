"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    CHAR,
    Column,
    Float,
    ForeignKey,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()


def _season_code_column() -> Column:
    return Column(
        "season_code",
        CHAR(3),
        ForeignKey("season.season_code", onupdate="CASCADE"),
        nullable=False,
    )


# ============================================================================
# SEASON TABLE
# ============================================================================
season_table = Table(
    "season",
    metadata,
    Column("season_id", String(36), primary_key=True),  # UUID as string
    Column("season_code", CHAR(3), nullable=False, unique=True),
    Column("hacker_application_form_id", String(36), nullable=True, unique=True),
    Column("rsvp_form_id", String(36), nullable=True, unique=True),
)


# ============================================================================
# ADMIN TABLE (global, not season-scoped)
# ============================================================================
admin_table = Table(
    "admin",
    metadata,
    Column("user_id", String, primary_key=True),
    Column("super_user", Boolean, nullable=False, default=False),
)


# ============================================================================
# SEASON MEMBERSHIP TABLES (one row per user per season)
# ============================================================================
hacker_table = Table(
    "hacker",
    metadata,
    Column("user_id", String, nullable=False),
    _season_code_column(),
    Column("score", Float, nullable=False, default=0.0),
    Column("status", String(32), nullable=True),  # "applied", "accepted", ...
    Column("nfc_id", Text, nullable=True, unique=True),
    PrimaryKeyConstraint("user_id", "season_code"),
)

sponsor_table = Table(
    "sponsor",
    metadata,
    Column("user_id", String, nullable=False),
    _season_code_column(),
    Column("org", Text, nullable=True),
    PrimaryKeyConstraint("user_id", "season_code"),
)

mentor_table = Table(
    "mentor",
    metadata,
    Column("user_id", String, nullable=False),
    _season_code_column(),
    PrimaryKeyConstraint("user_id", "season_code"),
)

volunteer_table = Table(
    "volunteer",
    metadata,
    Column("user_id", String, nullable=False),
    _season_code_column(),
    PrimaryKeyConstraint("user_id", "season_code"),
)
