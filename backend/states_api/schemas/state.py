"""
States API Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract and the catalog's record type.
How:   FastAPI validates request bodies against the request models, serializes
       responses through the response models, and generates OpenAPI docs.
       Python attributes are snake_case; wire names are camelCase aliases.

Design Decision:
    Schemas are separate from the SQLAlchemy model because the merged state
    view combines two sources (static catalog + stored facts) that never
    share a table.
"""

from datetime import date
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Catalog Records
# ══════════════════════════════════════════════════════════════════════════


class StateRecord(CamelModel):
    """
    Immutable reference data for one state.

    Built once from the bundled snapshot when the catalog loads and shared
    read-only by every request for the life of the process.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    state_code: str = Field(min_length=2, max_length=2, description="Two-letter state code")
    name: str = Field(description="Full state name")
    capital: str = Field(description="Capital city")
    nickname: str = Field(description="Official or popular nickname")
    population: int = Field(ge=0, description="Resident population")
    admission_date: date = Field(description="Date the state was admitted to the Union")
    is_contiguous: bool = Field(description="False only for the two detached states")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StateView(StateRecord):
    """
    A catalog record merged with the state's stored fun facts.

    Returned by GET /states and GET /states/{code}. `funfacts` is `[]` when
    the state has no stored facts.
    """

    funfacts: List[str] = Field(
        default_factory=list,
        description="Crowd-sourced fun facts, in insertion order",
    )

    @classmethod
    def merge(cls, record: StateRecord, facts: List[str]) -> "StateView":
        return cls(**record.model_dump(), funfacts=list(facts))


class FactSheetResponse(CamelModel):
    """Result of a fact mutation: the state's full, updated fact list."""

    state_code: str = Field(description="Two-letter state code")
    funfacts: List[str] = Field(description="Updated fun facts")


class RandomFactResponse(BaseModel):
    funfact: str = Field(description="One fun fact chosen uniformly at random")


class CapitalResponse(BaseModel):
    state: str
    capital: str


class NicknameResponse(BaseModel):
    state: str
    nickname: str


class PopulationResponse(BaseModel):
    state: str
    population: int


class AdmissionResponse(BaseModel):
    state: str
    admitted: date


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════
# Only presence and JSON shape are enforced here; emptiness and index range
# are business rules checked by FactService so direct callers get them too.


class AddFactsRequest(BaseModel):
    """Body of POST /states/{code}/funfact."""

    funfacts: List[str] = Field(description="Fun facts to append, in order")


class UpdateFactRequest(BaseModel):
    """Body of PATCH /states/{code}/funfact. Accepts `funfact` or `funFact`."""

    index: Union[StrictInt, StrictStr] = Field(
        description="1-based position of the fact to replace; integer strings accepted"
    )
    funfact: str = Field(
        validation_alias=AliasChoices("funfact", "funFact"),
        description="Replacement text",
    )


class DeleteFactRequest(BaseModel):
    """Body of DELETE /states/{code}/funfact."""

    index: Union[StrictInt, StrictStr] = Field(
        description="1-based position of the fact to remove; integer strings accepted"
    )


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "No Fun Facts found for Georgia",
            "request_id": "1f2e3d4c"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    states_loaded: int = Field(description="Number of records in the reference catalog")
    uptime_seconds: float = Field(description="Seconds since service started")
