"""Global enums - values must match DB CHECK constraints exactly.

Stored values keep the wording the business uses on its documents
(Spanish), member names are English.
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    SALES = "vendedor"


class MovementKind(str, Enum):
    SALE = "Venta"
    PAYMENT = "Pago"
    CREDIT_NOTE = "Nota de Crédito"
    MANUAL_ADJUSTMENT = "Ajuste de Saldo"
    BALANCE_RESET = "Reestablecimiento"


class CommissionBasis(str, Enum):
    """What a vendor's commission percentage applies to."""
    ON_SALES = "venta"
    ON_PAYMENTS = "pago"
    ON_COLLECTIONS = "cobro"


class AdjustmentState(str, Enum):
    """Advance / cash-in-hand entry state. APPLIED and CANCELLED are terminal."""
    PENDING = "pendiente"
    APPLIED = "aplicado"
    CANCELLED = "cancelado"


class LiquidationState(str, Enum):
    CALCULATED = "calculada"
    PAID = "pagada"
    ANNULLED = "anulada"
