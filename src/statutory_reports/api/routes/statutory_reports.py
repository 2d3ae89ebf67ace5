"""Statutory report download endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import PlainTextResponse, Response

from statutory_reports.api.dependencies import DataStore, TenantId
from statutory_reports.api.schemas import ErrorResponse, TDSSummaryResponse
from statutory_reports.services.esi_return import ESIReportBuilder
from statutory_reports.services.pf_ecr import PFReportBuilder
from statutory_reports.services.tds_summary import TDSReportBuilder

router = APIRouter(prefix="/statutory-reports", tags=["statutory-reports"])

Month = Annotated[int, Query(ge=1, le=12)]
Year = Annotated[int, Query(ge=1900, le=9999)]

ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get(
    "/pf-ecr",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def download_pf_ecr(
    store: DataStore,
    tenant_id: TenantId,
    month: Month,
    year: Year,
) -> PlainTextResponse:
    """Download the PF ECR file for a month."""
    content = await PFReportBuilder(store).generate(tenant_id, month, year)
    return PlainTextResponse(
        content,
        headers=_attachment(f"PF_ECR_{month:02d}_{year}.txt"),
    )


@router.get(
    "/esi-return",
    response_class=Response,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def download_esi_return(
    store: DataStore,
    tenant_id: TenantId,
    month: Month,
    year: Year,
) -> Response:
    """Download the ESI return CSV for a month."""
    content = await ESIReportBuilder(store).generate(tenant_id, month, year)
    return Response(
        content,
        media_type="text/csv",
        headers=_attachment(f"ESI_Return_{month:02d}_{year}.csv"),
    )


@router.get(
    "/tds-summary",
    response_model=TDSSummaryResponse,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def get_tds_summary(
    store: DataStore,
    tenant_id: TenantId,
    month: Month,
    year: Year,
) -> TDSSummaryResponse:
    """TDS withheld in a month, grouped by section."""
    summary = await TDSReportBuilder(store).generate(tenant_id, month, year)
    return TDSSummaryResponse.model_validate(summary.to_dict())
