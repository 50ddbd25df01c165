"""create users, cadets and medical_records

Revision ID: 7c1e2a9d4b30
Revises:
Create Date: 2025-09-18 10:12:44.201377

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e2a9d4b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

VACCINATIONS = [
    'covid_dose_1', 'covid_dose_2', 'covid_dose_3',
    'hepatitis_b_dose_1', 'hepatitis_b_dose_2', 'tetanus_toxoid',
    'chicken_pox_dose_1', 'chicken_pox_dose_2', 'chicken_pox_suffered',
    'yellow_fever',
]

HEALTH_PARAMETERS = [
    'bmi', 'body_fat', 'calcaneal_bone_density', 'bp', 'pulse', 'so2',
    'bca_fat', 'ecg', 'temp', 'smm_kg',
]

TESTS = [
    'endurance_test', 'agility_test', 'speed_test', 'vertical_jump', 'ball_throw',
    'lower_back_strength', 'shoulder_dynamometer_left', 'shoulder_dynamometer_right',
    'hand_grip_dynamometer_left', 'hand_grip_dynamometer_right',
]


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        *timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'cadets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('battalion', sa.String(100), nullable=False),
        sa.Column('company', sa.String(50), nullable=False),
        sa.Column('join_date', sa.DateTime(), nullable=False),
        sa.Column('academy_number', sa.Integer(), nullable=True),
        sa.Column('height', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Integer(), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('course', sa.String(100), nullable=True),
        sa.Column('sex', sa.String(10), nullable=True),
        sa.Column('relegated', sa.String(1), nullable=False, server_default='N'),
        sa.Column('blood_group', sa.String(10), nullable=True),
        *[sa.Column(name, sa.String(20), nullable=True) for name in HEALTH_PARAMETERS],
        *[sa.Column(name, sa.Boolean(), nullable=False, server_default=sa.false()) for name in VACCINATIONS],
        sa.Column('past_medical_history', sa.Text(), nullable=True),
        *[sa.Column(name, sa.String(50), nullable=True) for name in TESTS],
        sa.Column('overall_assessment', sa.String(100), nullable=True),
        sa.Column('menstrual_frequency', sa.String(20), nullable=True),
        sa.Column('menstrual_days', sa.Integer(), nullable=True),
        sa.Column('last_menstrual_date', sa.DateTime(), nullable=True),
        sa.Column('menstrual_aids', sa.Text(), nullable=True),
        sa.Column('sexually_active', sa.String(10), nullable=True),
        sa.Column('marital_status', sa.String(20), nullable=True),
        sa.Column('pregnancy_history', sa.Text(), nullable=True),
        sa.Column('contraceptive_history', sa.Text(), nullable=True),
        sa.Column('surgery_history', sa.Text(), nullable=True),
        sa.Column('medical_condition', sa.Text(), nullable=True),
        sa.Column('hemoglobin_level', sa.Numeric(4, 2), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_cadets_id', 'cadets', ['id'])

    op.create_table(
        'medical_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cadet_id', sa.Integer(), sa.ForeignKey('cadets.id'), nullable=False),
        sa.Column('date_of_reporting', sa.DateTime(), nullable=False),
        sa.Column('medical_problem', sa.Text(), nullable=False),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('medical_status', sa.String(20), nullable=False, server_default='Active'),
        sa.Column('attend_c', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('mi_detained', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ex_ppg', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('attend_b', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('physiotherapy', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_training_days_missed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('monitoring_case', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('contact_no', sa.String(20), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_medical_records_id', 'medical_records', ['id'])
    op.create_index('ix_medical_records_cadet_id', 'medical_records', ['cadet_id'])


def downgrade() -> None:
    op.drop_table('medical_records')
    op.drop_table('cadets')
    op.drop_table('users')
