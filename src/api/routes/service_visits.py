"""Service Visit API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.workshop_request import ServiceVisitRequestSchema
from src.app.use_cases.invoicing.dtos import (
    RecordServiceVisitCommandDTO,
    ServiceVisitRecordedResponseDTO,
)
from src.app.use_cases.invoicing.record_service_visit import RecordServiceVisit
from src.adapter.repositories.car_repository import SqlAlchemyCarRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.repositories.service_visit_repository import SqlAlchemyServiceVisitRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_shop_settings
from src.domain.shop_settings import ShopSettings
from src.api.error import ClientError

router = APIRouter(prefix="/workshop", tags=["Service Visits"])


@router.post(
    "/service-visits",
    response_model=ServiceVisitRecordedResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Car not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "CAR_NOT_FOUND",
                            "message": "Car with ID 42 not found"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Invalid line items or payment details",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EMPTY_LINE_ITEMS",
                            "message": "At least one line item is required"
                        }
                    }
                }
            }
        }
    }
)
async def record_service_visit(
    request: ServiceVisitRequestSchema,
    session: AsyncSession = Depends(get_session),
    settings: ShopSettings = Depends(get_shop_settings),
):
    """
    Record a service visit and raise its invoice.

    The visit, its invoice and the invoice's line items are written together.
    Rows with neither a name nor a price are ignored. The next service date is
    `visit_date` plus `reminder_weeks` weeks.

    **Example request:**
    ```json
    {
      "car_id": 1,
      "visit_date": "2024-01-01",
      "reminder_weeks": 8,
      "line_items": [
        {"name": "Oil Change", "quantity": "1", "unit_price": "89.00"},
        {"name": "Labour (per hour)", "quantity": "2", "unit_price": "95.00"}
      ]
    }
    ```

    **Returns:**
    - 201: Visit and invoice created
    - 400: Invalid line items or missing payment method
    - 404: Car not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    car_repo = SqlAlchemyCarRepository(session)
    visit_repo = SqlAlchemyServiceVisitRepository(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    line_item_repo = SqlAlchemyLineItemRepository(session)

    command = RecordServiceVisitCommandDTO(**request.model_dump())

    use_case = RecordServiceVisit(
        uow, car_repo, visit_repo, invoice_repo, line_item_repo, settings
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "CAR_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)

    return result.value
