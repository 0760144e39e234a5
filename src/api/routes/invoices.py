"""Invoice API Routes

FastAPI routes for invoice totals, listing and status transitions.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.workshop_request import (
    EstimateTotalsRequestSchema,
    MarkPaidRequestSchema,
    ReplaceLineItemsRequestSchema,
)
from src.app.use_cases.invoicing.dtos import (
    EstimateTotalsCommandDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    ListUnpaidInvoicesResponseDTO,
    MarkInvoicePaidCommandDTO,
    ReplaceLineItemsCommandDTO,
    TotalsResponseDTO,
)
from src.app.use_cases.invoicing.estimate_totals import EstimateTotals
from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.list_invoices import ListInvoices
from src.app.use_cases.invoicing.list_unpaid_invoices import ListUnpaidInvoices
from src.app.use_cases.invoicing.replace_invoice_lines import ReplaceInvoiceLines
from src.app.use_cases.invoicing.mark_invoice_sent import MarkInvoiceSent
from src.app.use_cases.invoicing.mark_invoice_paid import MarkInvoicePaid
from src.app.use_cases.invoicing.delete_invoice import DeleteInvoice
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_shop_settings
from src.domain.invoice import InvoiceStatus
from src.domain.shop_settings import ShopSettings
from src.api.error import ClientError

router = APIRouter(prefix="/workshop/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice with ID 123 not found"
                    }
                }
            }
        }
    }
}

INVALID_STATUS_RESPONSE = {
    400: {
        "description": "Invalid invoice status",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVALID_INVOICE_STATUS",
                        "message": "Only draft invoices can be marked as sent. Current status: Paid"
                    }
                }
            }
        }
    }
}


def _raise_for(error) -> None:
    if error.code.endswith("_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ClientError(error)


@router.post(
    "/estimate",
    response_model=TotalsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def estimate_totals(
    request: EstimateTotalsRequestSchema,
    settings: ShopSettings = Depends(get_shop_settings),
):
    """
    Preview invoice totals without saving anything.

    Quantity and unit price may be sent as strings; values that cannot be
    read as numbers count as zero. Tax applies to taxable lines only and is
    rounded half-up to cents.

    **Example request:**
    ```json
    {
      "line_items": [
        {"name": "Oil Change", "quantity": "1", "unit_price": "89.00"},
        {"name": "Labour (per hour)", "quantity": "2", "unit_price": "95.00"}
      ],
      "tax_rate": "10"
    }
    ```

    **Example response:**
    ```json
    {"subtotal": "279.00", "taxable_base": "279.00", "tax_rate": "10",
     "tax_total": "27.90", "total": "306.90"}
    ```
    """
    command = EstimateTotalsCommandDTO(line_items=request.line_items, tax_rate=request.tax_rate)

    result = await EstimateTotals(settings).execute(command)
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=ListInvoicesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """
    List invoices, newest first.

    **Query parameters:**
    - `status` (optional): Draft, Sent, Paid or Overdue (effective status)
    - `limit` (optional): Page size, 1-100 (default 20)
    - `offset` (optional): Items to skip (default 0)
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await ListInvoices(invoice_repo).execute(
        status=status_filter, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/unpaid",
    response_model=ListUnpaidInvoicesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_unpaid_invoices(session: AsyncSession = Depends(get_session)):
    """
    List every invoice not yet paid, oldest due date first, with the total
    outstanding and how many are overdue.
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await ListUnpaidInvoices(invoice_repo).execute()
    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Get an invoice with its line items."""
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    line_item_repo = SqlAlchemyLineItemRepository(session)

    result = await GetInvoice(invoice_repo, line_item_repo).execute(invoice_id)
    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.put(
    "/{invoice_id}/line-items",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND_RESPONSE, **INVALID_STATUS_RESPONSE},
)
async def replace_line_items(
    invoice_id: int,
    request: ReplaceLineItemsRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Replace all line items of a draft invoice and recompute its totals.

    **Returns:**
    - 200: Line items replaced
    - 400: Invoice is not a draft, or line items are invalid
    - 404: Invoice not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    line_item_repo = SqlAlchemyLineItemRepository(session)

    command = ReplaceLineItemsCommandDTO(
        invoice_id=invoice_id,
        line_items=request.line_items,
        tax_rate=request.tax_rate,
    )

    result = await ReplaceInvoiceLines(uow, invoice_repo, line_item_repo).execute(command)
    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={**NOT_FOUND_RESPONSE, **INVALID_STATUS_RESPONSE},
)
async def send_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Mark a draft invoice as sent."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    line_item_repo = SqlAlchemyLineItemRepository(session)

    result = await MarkInvoiceSent(uow, invoice_repo, line_item_repo).execute(invoice_id)
    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{invoice_id}/pay",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        **NOT_FOUND_RESPONSE,
        400: {
            "description": "Payment method required",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PAYMENT_METHOD_REQUIRED",
                            "message": "A payment method is required to mark an invoice as paid"
                        }
                    }
                }
            }
        }
    }
)
async def pay_invoice(
    invoice_id: int,
    request: Optional[MarkPaidRequestSchema] = None,
    session: AsyncSession = Depends(get_session),
    settings: ShopSettings = Depends(get_shop_settings),
):
    """
    Record payment of an invoice.

    Allowed from any status. Paying an already paid invoice overwrites the
    payment method and date.

    **Request body:**
    - `payment_method` (optional when the shop has a default): Cash, Card,
      Bank Transfer, Cheque or Other
    - `paid_date` (optional): Defaults to today
    """
    request = request or MarkPaidRequestSchema()
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    line_item_repo = SqlAlchemyLineItemRepository(session)

    command = MarkInvoicePaidCommandDTO(
        invoice_id=invoice_id,
        payment_method=request.payment_method,
        paid_date=request.paid_date,
    )

    use_case = MarkInvoicePaid(uow, invoice_repo, line_item_repo, settings)
    result = await use_case.execute(command)
    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND_RESPONSE,
)
async def delete_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Delete an invoice and its line items. This cannot be undone."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await DeleteInvoice(uow, invoice_repo).execute(invoice_id)
    if result.is_err():
        _raise_for(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
