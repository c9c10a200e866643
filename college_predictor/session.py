"""
Explicit session state for one user working through the predictor.

Each action returns a new PredictorSession; nothing is mutated in place,
so a failed action leaves the caller's previous session intact.
"""
from dataclasses import dataclass, replace
from typing import Optional

import pandas as pd

from . import config
from .engine import filter_records, refine_results
from .models import Criteria, Page
from .pagination import paginate


@dataclass(frozen=True, eq=False)
class PredictorSession:
    dataset: pd.DataFrame
    criteria: Optional[Criteria] = None
    result: Optional[pd.DataFrame] = None
    search_term: str = ""
    page_number: int = 1
    page_size: int = config.RESULTS_PER_PAGE

    @classmethod
    def start(cls, dataset: pd.DataFrame, page_size: int = config.RESULTS_PER_PAGE) -> "PredictorSession":
        return cls(dataset=dataset, page_size=page_size)

    def predict(self, criteria: Criteria) -> "PredictorSession":
        """Run the filter engine and replace the current result set."""
        result = filter_records(self.dataset, criteria)
        return replace(self, criteria=criteria, result=result, search_term="", page_number=1)

    def search(self, term: Optional[str]) -> "PredictorSession":
        return replace(self, search_term=term or "", page_number=1)

    def go_to(self, page_number: int) -> "PredictorSession":
        return replace(self, page_number=page_number)

    def reset(self) -> "PredictorSession":
        return PredictorSession.start(self.dataset, self.page_size)

    def visible_results(self) -> pd.DataFrame:
        """Current result set narrowed by the search term, if any."""
        if self.result is None:
            return self.dataset.iloc[0:0]
        return refine_results(self.result, self.search_term)

    def current_page(self) -> Page:
        return paginate(self.visible_results(), self.page_size, self.page_number)
