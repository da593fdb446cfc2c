"""create customer_ledger and supplier_ledger journals

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0002'
down_revision = '0001'
branch_labels = None
depends_on = None


transaction_kind = sa.Enum(
    'opening', 'sale_order', 'sales_invoice', 'po', 'payment',
    name='ledger_transaction_type_enum',
)


def _journal_table(name, party_column, party_table):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transaction_type', transaction_kind, nullable=False),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('reference_id', sa.Integer(), nullable=True),
        sa.Column('reference_no', sa.String(length=50), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('debit', sa.Numeric(19, 4), nullable=False),
        sa.Column('credit', sa.Numeric(19, 4), nullable=False),
        sa.Column('balance', sa.Numeric(19, 4), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column(
            party_column,
            sa.Integer(),
            sa.ForeignKey(f'{party_table}.id'),
            nullable=False,
        ),
    )
    op.create_index(f'ix_{name}_{party_column}', name, [party_column])


def upgrade():
    _journal_table('customer_ledger', 'customer_id', 'customers')
    _journal_table('supplier_ledger', 'supplier_id', 'suppliers')


def downgrade():
    op.drop_table('supplier_ledger')
    op.drop_table('customer_ledger')
    transaction_kind.drop(op.get_bind(), checkfirst=True)
