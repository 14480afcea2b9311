"""Inventory ledger endpoints."""

import io
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from stock_ledger.api.dependencies import (
    get_add_stock_use_case,
    get_delete_stock_use_case,
    get_inventory_overview_use_case,
    get_issue_stock_use_case,
    get_return_stock_use_case,
)
from stock_ledger.application.dto.requests import AddStockRequest, IssueStockRequest
from stock_ledger.application.dto.responses import (
    ActivityLogResponse,
    AddStockResponse,
    DeleteStockResponse,
    ErrorResponse,
    InventoryListResponse,
    InventoryRecordResponse,
    InventoryReportResponse,
    InventorySummaryResponse,
    IssueStockResponse,
    ReturnStockResponse,
)
from stock_ledger.application.use_cases import (
    AddStockUseCase,
    DeleteStockUseCase,
    InventoryOverviewUseCase,
    IssueStockUseCase,
    ReturnStockUseCase,
)
from stock_ledger.core.entities.inventory import StockStatus

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

MUTATION_ERRORS = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    q: str | None = Query(default=None, description="Search query"),
    status_filter: StockStatus | None = Query(default=None, alias="status"),
    issuable: bool = Query(default=False, description="Only lots that can be issued"),
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> InventoryListResponse:
    """List lots with their derived status."""
    return await use_case.list_inventory(query=q, status=status_filter, issuable=issuable)


@router.get("/summary", response_model=InventorySummaryResponse)
async def get_summary(
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> InventorySummaryResponse:
    """Counts by status and total value on hand."""
    return await use_case.summary()


@router.get("/report", response_model=InventoryReportResponse)
async def get_report(
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> InventoryReportResponse:
    """Low stock, expiring, out-of-stock and fastest moving items."""
    return await use_case.report()


@router.get("/export")
async def export_inventory(
    q: str | None = Query(default=None, description="Search query"),
    status_filter: StockStatus | None = Query(default=None, alias="status"),
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> StreamingResponse:
    """Export the listing as CSV."""
    content = await use_case.export_csv(query=q, status=status_filter)
    filename = f"inventory_{date.today().isoformat()}.csv"
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/activity", response_model=ActivityLogResponse)
async def get_activity(
    limit: int | None = Query(default=None, ge=1),
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> ActivityLogResponse:
    """Recent ledger activity, newest first."""
    return await use_case.activity(limit)


@router.get(
    "/{record_id}",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_record(
    record_id: str,
    use_case: InventoryOverviewUseCase = Depends(get_inventory_overview_use_case),
) -> InventoryRecordResponse:
    """Get one lot."""
    return await use_case.get_record(record_id)


@router.post(
    "",
    response_model=AddStockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def add_stock(
    request: AddStockRequest,
    use_case: AddStockUseCase = Depends(get_add_stock_use_case),
) -> AddStockResponse:
    """Receive a new lot."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/{record_id}/issue",
    response_model=IssueStockResponse,
    responses={400: {"model": ErrorResponse}, **MUTATION_ERRORS},
)
async def issue_stock(
    record_id: str,
    request: IssueStockRequest,
    use_case: IssueStockUseCase = Depends(get_issue_stock_use_case),
) -> IssueStockResponse:
    """Issue units out of a lot."""
    result = await use_case.execute(record_id, request.quantity)
    return use_case.to_response(result)


@router.post(
    "/{record_id}/return",
    response_model=ReturnStockResponse,
    responses=MUTATION_ERRORS,
)
async def return_stock(
    record_id: str,
    use_case: ReturnStockUseCase = Depends(get_return_stock_use_case),
) -> ReturnStockResponse:
    """Return a lot, removing it from inventory."""
    result = await use_case.execute(record_id)
    return use_case.to_response(result)


@router.delete(
    "/{record_id}",
    response_model=DeleteStockResponse,
    responses=MUTATION_ERRORS,
)
async def delete_stock(
    record_id: str,
    use_case: DeleteStockUseCase = Depends(get_delete_stock_use_case),
) -> DeleteStockResponse:
    """Delete a lot."""
    result = await use_case.execute(record_id)
    return use_case.to_response(result)
