"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Commission configuration / vendors
  2xxx: Commission calculation
  3xxx: Adjustment ledgers (advances, cash in hand)
  4xxx: Liquidations
  5xxx: Movement ledger / clients
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Commission configuration ---

class CommissionNotConfiguredError(AppError):
    def __init__(self, vendor_id: int) -> None:
        super().__init__(1001, f"No active commission config for vendor {vendor_id}", 404)


class InvalidCommissionConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1002, f"Invalid commission config: {detail}", 422)


class VendorNotFoundError(AppError):
    def __init__(self, vendor_id: int) -> None:
        super().__init__(1003, f"Vendor not found: {vendor_id}", 404)


# --- 2xxx: Calculation ---

class InvalidRangeError(AppError):
    def __init__(self, date_from: object, date_to: object) -> None:
        super().__init__(
            2001, f"Invalid period: date_from {date_from} is after date_to {date_to}", 422
        )


# --- 3xxx: Adjustment ledgers ---

class InvalidAmountError(AppError):
    def __init__(self, field: str, amount: object) -> None:
        super().__init__(3001, f"Invalid amount for {field}: {amount}", 422)


class AdjustmentEntryNotFoundError(AppError):
    def __init__(self, kind: str, entry_id: int) -> None:
        super().__init__(3002, f"{kind} entry not found: {entry_id}", 404)


class AdjustmentEntryNotPendingError(AppError):
    def __init__(self, kind: str, entry_id: int, state: str) -> None:
        super().__init__(3003, f"{kind} entry {entry_id} is {state}, not pending", 409)


# --- 4xxx: Liquidations ---

class LiquidationNotFoundError(AppError):
    def __init__(self, liquidation_id: int) -> None:
        super().__init__(4001, f"Liquidation not found: {liquidation_id}", 404)


class InvalidLiquidationStateError(AppError):
    def __init__(self, liquidation_id: int, state: str, action: str) -> None:
        super().__init__(
            4002, f"Liquidation {liquidation_id} in state {state} cannot be {action}", 409
        )


class TransactionFailureError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Liquidation was rolled back: {detail}", 500)


class LiquidationAlreadyExistsError(AppError):
    def __init__(self, vendor_id: int, existing_id: int) -> None:
        super().__init__(
            4004,
            f"Vendor {vendor_id} already has liquidation {existing_id} for this period",
            409,
        )


# --- 5xxx: Movement ledger ---

class ClientNotFoundError(AppError):
    def __init__(self, client_id: int) -> None:
        super().__init__(5001, f"Client not found: {client_id}", 404)


class InvalidMovementError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5002, f"Invalid movement: {detail}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
