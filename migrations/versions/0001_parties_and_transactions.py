"""create parties and source transaction tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def _party_table(name):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('mobile_no', sa.String(length=30), nullable=True),
        sa.Column('current_balance', sa.Numeric(19, 4), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )


def _source_table(name, party_column, party_table, payment=False):
    columns = [
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('reference_no', sa.String(length=50), nullable=False),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(19, 4), nullable=True),
        sa.Column('previous_balance', sa.Numeric(19, 4), nullable=True),
        sa.Column('final_balance', sa.Numeric(19, 4), nullable=True),
        sa.Column('notes', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column(
            party_column,
            sa.Integer(),
            sa.ForeignKey(f'{party_table}.id'),
            nullable=False,
        ),
    ]
    if payment:
        columns.append(
            sa.Column('payment_method', sa.String(length=30), nullable=True)
        )
    op.create_table(name, *columns)
    op.create_index(f'ix_{name}_{party_column}', name, [party_column])


def upgrade():
    _party_table('customers')
    _party_table('suppliers')
    _source_table('sales_invoices', 'customer_id', 'customers')
    _source_table('payments_in', 'customer_id', 'customers', payment=True)
    _source_table('purchase_orders', 'supplier_id', 'suppliers')
    _source_table('payments_out', 'supplier_id', 'suppliers', payment=True)


def downgrade():
    for name in (
        'payments_out', 'purchase_orders', 'payments_in', 'sales_invoices',
        'suppliers', 'customers',
    ):
        op.drop_table(name)
