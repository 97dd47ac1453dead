# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/errors.py

Errores de dominio del módulo Orders.

Los servicios lanzan estas excepciones; los ruteadores las traducen a
HTTPException usando `status_code`, sin que los servicios dependan de
FastAPI.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations


class OrdersError(Exception):
    """Error base del módulo Orders."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Firma de contrato
# ---------------------------------------------------------------------------
class ContractSigningError(OrdersError):
    pass


class ClientNotFoundError(ContractSigningError):
    status_code = 404

    def __init__(self, message: str = "Client not found") -> None:
        super().__init__(message)


class OrderNotFoundError(OrdersError):
    status_code = 404

    def __init__(self, message: str = "Order not found") -> None:
        super().__init__(message)


class ContractOrderNotFoundError(OrderNotFoundError, ContractSigningError):
    pass


class NoContractRequiredError(ContractSigningError):
    def __init__(self, message: str = "No contract required for this order") -> None:
        super().__init__(message)


class ContractAlreadySignedError(ContractSigningError):
    def __init__(self, message: str = "Contract already signed") -> None:
        super().__init__(message)


class OrderNotAwaitingContractError(ContractSigningError):
    """La orden ya salió de AWAITING_CONTRACT (completada, cancelada o reembolsada)."""

    def __init__(self, message: str = "Order is not awaiting a contract signature") -> None:
        super().__init__(message)



# ---------------------------------------------------------------------------
# Creación de órdenes / administración
# ---------------------------------------------------------------------------
class OrderValidationError(OrdersError):
    status_code = 400


class RefundError(OrdersError):
    status_code = 400


class PaymentGatewayError(OrdersError):
    """El gateway rechazó la operación o no está configurado."""

    status_code = 502


class InvoiceNotFoundError(OrdersError):
    status_code = 404

    def __init__(self, message: str = "Invoice not found") -> None:
        super().__init__(message)


__all__ = [
    "OrdersError",
    "ContractSigningError",
    "ClientNotFoundError",
    "OrderNotFoundError",
    "ContractOrderNotFoundError",
    "NoContractRequiredError",
    "ContractAlreadySignedError",
    "OrderNotAwaitingContractError",
    "OrderValidationError",
    "RefundError",
    "PaymentGatewayError",
    "InvoiceNotFoundError",
]
