from enum import Enum
from typing import Any, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field


class CollegeType(str, Enum):
    GOVERNMENT_AUTONOMOUS = "Government-Autonomous"
    GOVERNMENT = "Government"
    AUTONOMOUS = "Autonomous"
    AIDED = "Aided"
    UNAIDED = "Unaided"
    OTHER = "Other"


class PredictionMode(str, Enum):
    RANK = "rank"
    PERCENTILE = "percentile"


class Criteria(BaseModel):
    """
    Eligibility criteria for one predict action.

    Threshold and limit are checked by the filter engine rather than here,
    so an out-of-range value still builds a Criteria object. Threshold is
    left untyped so that text and booleans also reach that check instead
    of being parsed or coerced by pydantic.
    """
    model_config = ConfigDict(frozen=True)

    seat_types: Set[str] = Field(default_factory=set, description="Seat types (empty = all)")
    branches: Set[str] = Field(default_factory=set, description="Branches (empty = all)")
    college_types: Set[str] = Field(default_factory=set, description="College types (empty = all)")
    regions: Set[str] = Field(default_factory=set, description="Regions (empty = all)")
    mode: PredictionMode = Field(PredictionMode.PERCENTILE, description="Filter by rank or percentile")
    threshold: Any = Field(None, description="Rank ceiling or percentile floor")
    limit: Union[int, Literal["all"]] = Field("all", description="Maximum number of colleges")


class Record(BaseModel):
    institute: Optional[str] = None
    institute_code: Optional[str] = None
    branch: Optional[str] = None
    seat_type: Optional[str] = None
    rank: Optional[float] = None
    percentile: Optional[float] = None
    college_type: CollegeType = CollegeType.OTHER


class Page(BaseModel):
    records: List[Record]
    start_index: int
    end_index: int
    page_size: int
    total_results: int
    total_pages: int
    current_page: int
    has_previous: bool
    has_next: bool
    page_numbers: List[int]


class PredictionInput(BaseModel):
    criteria: Criteria
    search: Optional[str] = Field(None, description="Free-text search over the results")
    page: int = Field(1, description="Page number (1-based)")
    page_size: int = Field(20, ge=1, le=500, description="Results per page")


class SearchParam(BaseModel):
    label: str
    value: str


class PredictionResponse(BaseModel):
    search_params: List[SearchParam]
    page: Page
    total_matches: int
    message: str
    plot_data: Optional[dict] = None


class OptionsResponse(BaseModel):
    seat_types: List[str]
    branches: List[str]
    college_types: List[str]
    regions: List[str]


class ClassifyResponse(BaseModel):
    institute: Optional[str]
    college_type: CollegeType
