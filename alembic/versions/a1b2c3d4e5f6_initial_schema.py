"""Initial schema: users, licenses, fines, payments

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

fines.payment_id and payments.related_fine_id reference each other, so the
fines -> payments foreign key is added after both tables exist.
"""
from alembic import op
import sqlalchemy as sa

revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None

LICENSE_STATUS = ("Active", "Expired", "Suspended", "Revoked")
FINE_STATUS = ("Unpaid", "Paid", "Overdue", "Disputed", "Cancelled")
PAYMENT_METHOD = ("Credit Card", "Debit Card", "Bank Transfer", "Cash", "Mobile Money")
PAYMENT_TYPE = ("Fine Payment", "License Renewal", "Other")
PAYMENT_STATUS = ("Pending", "Completed", "Failed", "Refunded")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _owner():
    return sa.Column(
        "user_id",
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("id_number", sa.String(length=64), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("dl_number", sa.String(length=64), nullable=False),
        sa.Column("dl_expire_date", sa.Date(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_id_number", "users", ["id_number"], unique=True)
    op.create_index("ix_users_dl_number", "users", ["dl_number"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "licenses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("license_number", sa.String(length=64), nullable=False),
        sa.Column("issued_date", sa.DateTime(), nullable=False),
        sa.Column("expiry_date", sa.DateTime(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("status", sa.Enum(*LICENSE_STATUS, name="license_status"), nullable=False),
        sa.Column("restrictions", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_licenses_user_id"),
    )
    op.create_index("ix_licenses_id", "licenses", ["id"])
    op.create_index("ix_licenses_user_id", "licenses", ["user_id"])
    op.create_index("ix_licenses_license_number", "licenses", ["license_number"], unique=True)

    op.create_table(
        "fines",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("fine_number", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("reason", sa.String(length=500), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("status", sa.Enum(*FINE_STATUS, name="fine_status"), nullable=False),
        sa.Column("payment_id", sa.Uuid(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_fines_id", "fines", ["id"])
    op.create_index("ix_fines_user_id", "fines", ["user_id"])
    op.create_index("ix_fines_fine_number", "fines", ["fine_number"], unique=True)
    op.create_index("ix_fines_status", "fines", ["status"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _owner(),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("payment_date", sa.DateTime(), nullable=False),
        sa.Column("payment_method", sa.Enum(*PAYMENT_METHOD, name="payment_method"), nullable=False),
        sa.Column("payment_type", sa.Enum(*PAYMENT_TYPE, name="payment_type"), nullable=False),
        sa.Column("reference_id", sa.String(length=64), nullable=False),
        sa.Column("status", sa.Enum(*PAYMENT_STATUS, name="payment_status"), nullable=False),
        sa.Column(
            "related_fine_id", sa.Uuid(),
            sa.ForeignKey("fines.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "related_license_id", sa.Uuid(),
            sa.ForeignKey("licenses.id", ondelete="SET NULL"), nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_payments_id", "payments", ["id"])
    op.create_index("ix_payments_user_id", "payments", ["user_id"])
    op.create_index("ix_payments_payment_date", "payments", ["payment_date"])
    op.create_index("ix_payments_reference_id", "payments", ["reference_id"], unique=True)

    op.create_foreign_key(
        "fk_fines_payment_id", "fines", "payments",
        ["payment_id"], ["id"], ondelete="SET NULL",
    )


def downgrade() -> None:
    op.drop_constraint("fk_fines_payment_id", "fines", type_="foreignkey")
    op.drop_table("payments")
    op.drop_table("fines")
    op.drop_table("licenses")
    op.drop_table("users")
    for enum_name in ("payment_status", "payment_type", "payment_method", "fine_status", "license_status"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
