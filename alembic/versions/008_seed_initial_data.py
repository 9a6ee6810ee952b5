"""008: seed initial data

Revision ID: 008
Revises: 007
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op

revision: str = "008"
down_revision: Union[str, None] = "007"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO users (name, email, role) VALUES
            ('Administrador', 'admin@example.com', 'admin'),
            ('Vendedor Demo', 'ventas@example.com', 'vendedor');
    """)

    # Default commission configs, same defaults as vendor onboarding
    op.execute("""
        INSERT INTO vendor_commission_configs (vendor_id, percentage, basis, minimum, comment)
        SELECT id, 0, 'pago', 0, 'Administrador - Sin comisión'
        FROM users WHERE email = 'admin@example.com';
    """)
    op.execute("""
        INSERT INTO vendor_commission_configs (vendor_id, percentage, basis, minimum, comment)
        SELECT id, 5, 'pago', 0, 'Vendedor - 5% sobre pagos recibidos'
        FROM users WHERE email = 'ventas@example.com';
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM vendor_commission_configs
        WHERE vendor_id IN (
            SELECT id FROM users WHERE email IN ('admin@example.com', 'ventas@example.com')
        );
    """)
    op.execute("DELETE FROM users WHERE email IN ('admin@example.com', 'ventas@example.com');")
