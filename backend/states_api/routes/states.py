"""
States API Backend — State Route Handlers
==========================================

What:  The /states resource: catalog listing and lookups, field projections,
       and fun-fact reads and mutations.
How:   Each handler resolves a FactService (catalog + per-request store)
       through dependencies and returns a response model. Errors are raised
       as application exceptions and rendered by the global handlers.

Route Inventory:
    GET    /states?contig=true|false    list of merged state views
    GET    /states/{code}               one merged state view
    GET    /states/{code}/funfact       one random fun fact
    GET    /states/{code}/capital       {state, capital}
    GET    /states/{code}/nickname      {state, nickname}
    GET    /states/{code}/population    {state, population}
    GET    /states/{code}/admission     {state, admitted}
    POST   /states/{code}/funfact       append fun facts
    PATCH  /states/{code}/funfact       replace one fun fact by 1-based index
    DELETE /states/{code}/funfact       remove one fun fact by 1-based index
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from states_api.database import get_db_session
from states_api.schemas.state import (
    AddFactsRequest,
    AdmissionResponse,
    CapitalResponse,
    DeleteFactRequest,
    ErrorResponse,
    FactSheetResponse,
    NicknameResponse,
    PopulationResponse,
    RandomFactResponse,
    StateView,
    UpdateFactRequest,
)
from states_api.services.catalog import Catalog
from states_api.services.fact_service import FactService
from states_api.services.fact_store import FactStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/states", tags=["States"])

NOT_FOUND = {404: {"description": "Unknown state or fun fact", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Malformed request", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Fun facts store failure", "model": ErrorResponse}}


# ── Dependencies ──────────────────────────────────────────────────────────


def get_catalog(request: Request) -> Catalog:
    """Returns the catalog loaded into app.state by the lifespan handler."""
    return request.app.state.catalog


def get_fact_service(
    catalog: Catalog = Depends(get_catalog),
    db: AsyncSession = Depends(get_db_session),
) -> FactService:
    return FactService(catalog=catalog, store=FactStore(db))


# ── Catalog Reads ─────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=List[StateView],
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="List states with their fun facts",
)
async def list_states(
    contig: Optional[bool] = Query(
        default=None,
        description="true: contiguous states only; false: only Alaska and Hawaii",
    ),
    service: FactService = Depends(get_fact_service),
) -> List[StateView]:
    return await service.list_states(contig)


@router.get(
    "/{state}",
    response_model=StateView,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get one state with its fun facts",
)
async def get_state(
    state: str,
    service: FactService = Depends(get_fact_service),
) -> StateView:
    return await service.get_state(state)


@router.get(
    "/{state}/funfact",
    response_model=RandomFactResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a random fun fact for a state",
)
async def get_random_fact(
    state: str,
    service: FactService = Depends(get_fact_service),
) -> RandomFactResponse:
    return RandomFactResponse(funfact=await service.get_random_fact(state))


# ── Field Projections ─────────────────────────────────────────────────────
# Pure catalog reads; no database session is opened.


@router.get("/{state}/capital", response_model=CapitalResponse, responses=NOT_FOUND)
async def get_capital(state: str, catalog: Catalog = Depends(get_catalog)) -> CapitalResponse:
    record = catalog.lookup(state)
    return CapitalResponse(state=record.name, capital=record.capital)


@router.get("/{state}/nickname", response_model=NicknameResponse, responses=NOT_FOUND)
async def get_nickname(state: str, catalog: Catalog = Depends(get_catalog)) -> NicknameResponse:
    record = catalog.lookup(state)
    return NicknameResponse(state=record.name, nickname=record.nickname)


@router.get("/{state}/population", response_model=PopulationResponse, responses=NOT_FOUND)
async def get_population(
    state: str, catalog: Catalog = Depends(get_catalog)
) -> PopulationResponse:
    record = catalog.lookup(state)
    return PopulationResponse(state=record.name, population=record.population)


@router.get("/{state}/admission", response_model=AdmissionResponse, responses=NOT_FOUND)
async def get_admission(state: str, catalog: Catalog = Depends(get_catalog)) -> AdmissionResponse:
    record = catalog.lookup(state)
    return AdmissionResponse(state=record.name, admitted=record.admission_date)


# ── Fun-Fact Mutations ────────────────────────────────────────────────────


@router.post(
    "/{state}/funfact",
    response_model=FactSheetResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Append fun facts to a state",
)
async def add_facts(
    state: str,
    body: AddFactsRequest,
    service: FactService = Depends(get_fact_service),
) -> FactSheetResponse:
    return await service.add_facts(state, body.funfacts)


@router.patch(
    "/{state}/funfact",
    response_model=FactSheetResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Replace a fun fact by its 1-based index",
)
async def update_fact(
    state: str,
    body: UpdateFactRequest,
    service: FactService = Depends(get_fact_service),
) -> FactSheetResponse:
    return await service.update_fact(state, body.index, body.funfact)


@router.delete(
    "/{state}/funfact",
    response_model=FactSheetResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
    summary="Remove a fun fact by its 1-based index",
)
async def delete_fact(
    state: str,
    body: DeleteFactRequest,
    service: FactService = Depends(get_fact_service),
) -> FactSheetResponse:
    return await service.delete_fact(state, body.index)
