"""initial schema persuratan

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-06 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum disimpan dengan nama member (UPPERCASE)
user_role = sa.Enum('ADMIN', 'MEMBER', name='userrole')
status_disposisi = sa.Enum('SELESAI', name='statusdisposisi')
pengolah_surat = sa.Enum(
    'KETUA_DPRD', 'WAKIL_KETUA_1', 'WAKIL_KETUA_2', 'WAKIL_KETUA_3', 'SEKWAN',
    name='pengolahsurat'
)
audit_action = sa.Enum(
    'LOGIN', 'LOGOUT', 'FAILED_LOGIN', 'CREATE', 'UPDATE', 'DELETE', 'EXPORT', 'VIEW',
    name='auditaction'
)
audit_entity = sa.Enum(
    'USER', 'SURAT_MASUK', 'SURAT_KELUAR', 'DISPOSISI', 'SURAT_TAMU', 'SYSTEM',
    name='auditentity'
)


def _audit_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('updated_by', sa.String(length=36), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_name'), 'users', ['name'], unique=False)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
    op.create_index(op.f('ix_users_created_by'), 'users', ['created_by'], unique=False)

    op.create_table(
        'surat_masuk',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.Column('no_urut', sa.Integer(), nullable=False),
        sa.Column('nomor_surat', sa.String(length=255), nullable=True),
        sa.Column('tanggal_surat', sa.Date(), nullable=False),
        sa.Column('tanggal_diteruskan', sa.Date(), nullable=False),
        sa.Column('asal_surat', sa.String(length=500), nullable=False),
        sa.Column('perihal', sa.String(), nullable=False),
        sa.Column('keterangan', sa.String(), nullable=True),
        sa.Column('file_path', sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_surat_masuk_no_urut'), 'surat_masuk', ['no_urut'], unique=True)
    op.create_index(op.f('ix_surat_masuk_nomor_surat'), 'surat_masuk', ['nomor_surat'], unique=False)
    op.create_index(op.f('ix_surat_masuk_tanggal_surat'), 'surat_masuk', ['tanggal_surat'], unique=False)
    op.create_index(op.f('ix_surat_masuk_created_by'), 'surat_masuk', ['created_by'], unique=False)

    op.create_table(
        'disposisi',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.Column('no_urut', sa.Integer(), nullable=False),
        sa.Column('nomor_disposisi', sa.String(length=100), nullable=False),
        sa.Column('tanggal_disposisi', sa.Date(), nullable=False),
        sa.Column('tujuan_disposisi', sa.String(length=500), nullable=False),
        sa.Column('isi_disposisi', sa.String(), nullable=False),
        sa.Column('keterangan', sa.String(), nullable=True),
        sa.Column('status', status_disposisi, nullable=False),
        sa.Column('surat_masuk_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['surat_masuk_id'], ['surat_masuk.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_disposisi_no_urut'), 'disposisi', ['no_urut'], unique=False)
    op.create_index(op.f('ix_disposisi_nomor_disposisi'), 'disposisi', ['nomor_disposisi'], unique=False)
    op.create_index(op.f('ix_disposisi_tanggal_disposisi'), 'disposisi', ['tanggal_disposisi'], unique=False)
    op.create_index(op.f('ix_disposisi_status'), 'disposisi', ['status'], unique=False)
    op.create_index(op.f('ix_disposisi_surat_masuk_id'), 'disposisi', ['surat_masuk_id'], unique=False)
    op.create_index(op.f('ix_disposisi_created_by'), 'disposisi', ['created_by'], unique=False)

    op.create_table(
        'surat_keluar',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.Column('no_urut', sa.Integer(), nullable=False),
        sa.Column('klas', sa.String(length=100), nullable=False),
        sa.Column('pengolah', pengolah_surat, nullable=False),
        sa.Column('tanggal_surat', sa.Date(), nullable=False),
        sa.Column('perihal_surat', sa.String(), nullable=False),
        sa.Column('kirim_kepada', sa.String(length=500), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=True),
        sa.Column('surat_masuk_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['surat_masuk_id'], ['surat_masuk.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_surat_keluar_no_urut'), 'surat_keluar', ['no_urut'], unique=True)
    op.create_index(op.f('ix_surat_keluar_pengolah'), 'surat_keluar', ['pengolah'], unique=False)
    op.create_index(op.f('ix_surat_keluar_tanggal_surat'), 'surat_keluar', ['tanggal_surat'], unique=False)
    op.create_index(op.f('ix_surat_keluar_surat_masuk_id'), 'surat_keluar', ['surat_masuk_id'], unique=False)
    op.create_index(op.f('ix_surat_keluar_created_by'), 'surat_keluar', ['created_by'], unique=False)

    op.create_table(
        'surat_tamu',
        sa.Column('id', sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.Column('no_urut', sa.Integer(), nullable=False),
        sa.Column('nama', sa.String(length=200), nullable=False),
        sa.Column('keperluan', sa.String(), nullable=False),
        sa.Column('asal_surat', sa.String(length=500), nullable=False),
        sa.Column('tujuan_surat', sa.String(length=500), nullable=False),
        sa.Column('nomor_telpon', sa.String(length=30), nullable=True),
        sa.Column('tanggal', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_surat_tamu_no_urut'), 'surat_tamu', ['no_urut'], unique=True)
    op.create_index(op.f('ix_surat_tamu_tanggal'), 'surat_tamu', ['tanggal'], unique=False)
    op.create_index(op.f('ix_surat_tamu_created_by'), 'surat_tamu', ['created_by'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('action', audit_action, nullable=False),
        sa.Column('entity', audit_entity, nullable=False),
        sa.Column('entity_id', sa.String(length=36), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('user_name', sa.String(length=200), nullable=True),
        sa.Column('method', sa.String(length=10), nullable=True),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column('details', sa.String(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('response_status', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_audit_logs_action'), 'audit_logs', ['action'], unique=False)
    op.create_index(op.f('ix_audit_logs_entity'), 'audit_logs', ['entity'], unique=False)
    op.create_index(op.f('ix_audit_logs_date'), 'audit_logs', ['date'], unique=False)
    op.create_index(op.f('ix_audit_logs_user_id'), 'audit_logs', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('surat_tamu')
    op.drop_table('surat_keluar')
    op.drop_table('disposisi')
    op.drop_table('surat_masuk')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (audit_entity, audit_action, pengolah_surat, status_disposisi, user_role):
        enum_type.drop(bind, checkfirst=True)
