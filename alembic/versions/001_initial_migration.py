"""Initial migration

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


sex_enum = sa.Enum('MALE', 'FEMALE', 'OTHER', name='sex')
bed_status_enum = sa.Enum('available', 'occupied', 'cleaning', 'out_of_order', name='bedstatus')
stay_type_enum = sa.Enum('WEEK', 'DAY', name='staytype')


def upgrade() -> None:
    # Create patients table
    op.create_table(
        'patients',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('sex', sex_enum, nullable=False),
        sa.Column('reduced_mobility', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('isolation_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Create beds table
    op.create_table(
        'beds',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('room_id', sa.String(length=50), nullable=False),
        sa.Column('code', sa.String(length=20), nullable=False),
        sa.Column('status', bed_status_enum, nullable=False, server_default='available'),
        sa.Column('isolation_capable', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_beds_room_id', 'beds', ['room_id'], unique=False)

    # Create hospital_stays table
    op.create_table(
        'hospital_stays',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('patient_id', sa.String(length=50), nullable=False),
        sa.Column('bed_id', sa.String(length=50), nullable=False),
        sa.Column('stay_type', stay_type_enum, nullable=False),
        sa.Column('admission_date', sa.Date(), nullable=False),
        sa.Column('discharge_date_planned', sa.Date(), nullable=True),
        sa.Column('discharge_date_effective', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['patient_id'], ['patients.id']),
        sa.CheckConstraint(
            'discharge_date_planned IS NULL OR discharge_date_planned >= admission_date',
            name='check_planned_discharge_after_admission'
        ),
        sa.CheckConstraint(
            'discharge_date_effective IS NULL OR discharge_date_effective >= admission_date',
            name='check_effective_discharge_after_admission'
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_hospital_stays_patient_id', 'hospital_stays', ['patient_id'], unique=False)
    op.create_index(
        'ix_hospital_stays_bed_admission', 'hospital_stays', ['bed_id', 'admission_date'], unique=False
    )


def downgrade() -> None:
    # Drop all tables in reverse order of creation
    op.drop_index('ix_hospital_stays_bed_admission', table_name='hospital_stays')
    op.drop_index('ix_hospital_stays_patient_id', table_name='hospital_stays')
    op.drop_table('hospital_stays')
    op.drop_index('ix_beds_room_id', table_name='beds')
    op.drop_table('beds')
    op.drop_table('patients')

    # Drop enums
    bind = op.get_bind()
    stay_type_enum.drop(bind, checkfirst=True)
    bed_status_enum.drop(bind, checkfirst=True)
    sex_enum.drop(bind, checkfirst=True)
