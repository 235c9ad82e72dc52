"""Employer router: CRUD over the current user's employers."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Query, status

from serveis.presentation.api.dependencies import (
    CurrentUser,
    DBSession,
    EmployerServiceDep,
)
from serveis.presentation.api.schemas.common import ErrorResponse
from serveis.presentation.api.schemas.employers import (
    EmployerCreateRequest,
    EmployerEndRequest,
    EmployerListResponse,
    EmployerResponse,
    EmployerUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Employer not found"}}


@router.get("", summary="List employers")
async def list_employers(
    current_user: CurrentUser,
    service: EmployerServiceDep,
    only_current: bool = Query(
        default=False,
        alias="onlyCurrent",
        description="Only employers without an end date",
    ),
) -> EmployerListResponse:
    employers = await service.list_for_user(
        current_user.user_id,
        only_current=only_current,
    )
    return EmployerListResponse(
        employers=[EmployerResponse.from_domain(e) for e in employers],
        total=len(employers),
    )


@router.get("/{employer_id}", summary="Get employer", responses=NOT_FOUND_RESPONSE)
async def get_employer(
    employer_id: int,
    current_user: CurrentUser,
    service: EmployerServiceDep,
) -> EmployerResponse:
    employer = await service.get(employer_id, current_user.user_id)
    return EmployerResponse.from_domain(employer)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create employer",
    responses={422: {"model": ErrorResponse, "description": "Invalid dates"}},
)
async def create_employer(
    request: EmployerCreateRequest,
    current_user: CurrentUser,
    service: EmployerServiceDep,
    session: DBSession,
) -> EmployerResponse:
    employer = await service.create(
        current_user.user_id,
        request.model_dump(exclude_none=True),
    )
    await session.commit()
    return EmployerResponse.from_domain(employer)


@router.put(
    "/{employer_id}",
    summary="Update employer",
    responses={
        **NOT_FOUND_RESPONSE,
        422: {"model": ErrorResponse, "description": "Invalid name or dates"},
    },
)
async def update_employer(
    employer_id: int,
    request: EmployerUpdateRequest,
    current_user: CurrentUser,
    service: EmployerServiceDep,
    session: DBSession,
) -> EmployerResponse:
    """Update the fields present in the body; omitted fields keep their value."""
    employer = await service.update(
        employer_id,
        current_user.user_id,
        request.model_dump(exclude_unset=True),
    )
    await session.commit()
    return EmployerResponse.from_domain(employer)


@router.delete(
    "/{employer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employer",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_employer(
    employer_id: int,
    current_user: CurrentUser,
    service: EmployerServiceDep,
    session: DBSession,
) -> None:
    await service.delete(employer_id, current_user.user_id)
    await session.commit()


@router.patch(
    "/{employer_id}/end",
    summary="End the working relationship",
    responses={
        **NOT_FOUND_RESPONSE,
        422: {"model": ErrorResponse, "description": "Already ended or bad date"},
    },
)
async def end_employer(
    employer_id: int,
    current_user: CurrentUser,
    service: EmployerServiceDep,
    session: DBSession,
    request: Optional[EmployerEndRequest] = Body(default=None),
) -> EmployerResponse:
    """Record the end date (default today) of a current employer."""
    employer = await service.end_relationship(
        employer_id,
        current_user.user_id,
        end_date=request.end_date if request else None,
    )
    await session.commit()
    return EmployerResponse.from_domain(employer)
