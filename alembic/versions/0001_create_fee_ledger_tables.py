"""create fee ledger tables

Revision ID: 0001_fee_ledger
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '0001_fee_ledger'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _base_indexes(table):
    op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)
    op.create_index(op.f(f'ix_{table}_is_deleted'), table, ['is_deleted'], unique=False)


def upgrade():
    op.create_table('academic_sessions',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('academic_sessions')

    op.create_table('institutions',
        *_base_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('logo', sa.String(length=500), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('website', sa.String(length=200), nullable=True),
        sa.Column('current_academic_session_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(['current_academic_session_id'], ['academic_sessions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('institutions')

    op.create_table('fee_categories',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('fee_categories')

    op.create_table('enrollments',
        *_base_columns(),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('class_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('section_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('academic_session_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('enrollment_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['academic_session_id'], ['academic_sessions.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('enrollments')
    op.create_index(op.f('ix_enrollments_student_id'), 'enrollments', ['student_id'], unique=False)
    op.create_index(op.f('ix_enrollments_class_id'), 'enrollments', ['class_id'], unique=False)
    op.create_index(op.f('ix_enrollments_academic_session_id'), 'enrollments', ['academic_session_id'], unique=False)
    op.create_index(op.f('ix_enrollments_status'), 'enrollments', ['status'], unique=False)

    op.create_table('fee_structures',
        *_base_columns(),
        sa.Column('class_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('academic_session_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('fee_category_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['academic_session_id'], ['academic_sessions.id'], ),
        sa.ForeignKeyConstraint(['fee_category_id'], ['fee_categories.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('fee_structures')
    op.create_index(op.f('ix_fee_structures_class_id'), 'fee_structures', ['class_id'], unique=False)
    op.create_index(op.f('ix_fee_structures_academic_session_id'), 'fee_structures', ['academic_session_id'], unique=False)
    op.create_index(op.f('ix_fee_structures_fee_category_id'), 'fee_structures', ['fee_category_id'], unique=False)

    op.create_table('student_fees',
        *_base_columns(),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('fee_structure_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('waiver_reason', sa.Text(), nullable=True),
        sa.Column('final_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['fee_structure_id'], ['fee_structures.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'fee_structure_id', name='uq_student_fee_structure')
    )
    _base_indexes('student_fees')
    op.create_index(op.f('ix_student_fees_student_id'), 'student_fees', ['student_id'], unique=False)
    op.create_index(op.f('ix_student_fees_fee_structure_id'), 'student_fees', ['fee_structure_id'], unique=False)
    op.create_index(op.f('ix_student_fees_status'), 'student_fees', ['status'], unique=False)

    op.create_table('payments',
        *_base_columns(),
        sa.Column('student_fee_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('student_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('transaction_id', sa.String(length=100), nullable=True),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('received_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(['student_fee_id'], ['student_fees.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    _base_indexes('payments')
    op.create_index(op.f('ix_payments_student_fee_id'), 'payments', ['student_fee_id'], unique=False)
    op.create_index(op.f('ix_payments_student_id'), 'payments', ['student_id'], unique=False)


def downgrade():
    op.drop_table('payments')
    op.drop_table('student_fees')
    op.drop_table('fee_structures')
    op.drop_table('enrollments')
    op.drop_table('fee_categories')
    op.drop_table('institutions')
    op.drop_table('academic_sessions')
