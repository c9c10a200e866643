import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

import pandas as pd
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from . import __version__, config
from .classifier import classify
from .exceptions import LoadError, ValidationError
from .export import build_results_pdf, criteria_summary, export_filename
from .models import (
    ClassifyResponse,
    OptionsResponse,
    PredictionInput,
    PredictionResponse,
    SearchParam,
)
from .session import PredictorSession
from .utils import build_percentile_chart, get_unique_options, load_dataset

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dataset once on startup"""
    app.state.dataset = None
    try:
        app.state.dataset = load_dataset()
        logger.info("Data loaded successfully on startup")
    except LoadError as e:
        logger.error(f"Failed to load data on startup: {e}")
    yield


# FastAPI Application
app = FastAPI(
    title="MHT-CET College Predictor",
    description="Filter, rank and export college admission cutoffs",
    version=__version__,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


@app.exception_handler(LoadError)
async def load_error_handler(request: Request, exc: LoadError):
    return JSONResponse(status_code=503, content={"success": False, "message": str(exc)})


def get_dataset(request: Request) -> pd.DataFrame:
    dataset = getattr(request.app.state, "dataset", None)
    if dataset is None:
        raise HTTPException(status_code=503, detail="Data not loaded")
    return dataset


def _run_session(input: PredictionInput, dataset: pd.DataFrame) -> PredictorSession:
    return (
        PredictorSession.start(dataset, page_size=input.page_size)
        .predict(input.criteria)
        .search(input.search)
        .go_to(input.page)
    )


@app.get("/")
async def root():
    """Welcome endpoint"""
    return {
        "message": "MHT-CET College Predictor API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    dataset = getattr(request.app.state, "dataset", None)
    return {
        "status": "healthy" if dataset is not None else "unhealthy",
        "data_loaded": dataset is not None,
        "total_records": 0 if dataset is None else len(dataset)
    }


@app.get("/api/options", response_model=OptionsResponse)
async def options(dataset: pd.DataFrame = Depends(get_dataset)):
    """Choices for the seat type, branch, college type and region dropdowns"""
    return get_unique_options(dataset)


@app.get("/api/classify", response_model=ClassifyResponse)
async def classify_institute(institute: Optional[str] = None):
    return ClassifyResponse(institute=institute, college_type=classify(institute))


@app.post("/api/predict", response_model=PredictionResponse)
async def predict(input: PredictionInput, dataset: pd.DataFrame = Depends(get_dataset)):
    """
    Filter the cutoff dataset by the given criteria

    Args:
        input (PredictionInput): Criteria plus optional search term and page

    Returns:
        Search parameters, the requested page and chart data
    """
    session = _run_session(input, dataset)
    visible = session.visible_results()
    page = session.current_page()

    if session.result.empty:
        message = "No colleges found matching your criteria"
    elif visible.empty:
        message = f'No colleges found matching "{input.search}"'
    else:
        message = f"Found {len(visible)} colleges"

    plot = build_percentile_chart(visible)
    return PredictionResponse(
        search_params=[
            SearchParam(label=label, value=value)
            for label, value in criteria_summary(input.criteria)
        ],
        page=page,
        total_matches=len(session.result),
        message=message,
        plot_data=json.loads(plot.to_json()) if plot else None
    )


@app.post("/api/export/pdf")
async def export_pdf(input: PredictionInput, dataset: pd.DataFrame = Depends(get_dataset)):
    """Download the full prediction result set as a PDF"""
    session = _run_session(input, dataset)
    pdf = build_results_pdf(session.result, criteria_summary(input.criteria))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'}
    )


@app.post("/api/reload")
async def reload_data(request: Request):
    """Reload the dataset, replacing the current one only on success"""
    dataset = load_dataset()
    request.app.state.dataset = dataset
    return {"status": "success", "total_records": len(dataset)}


if __name__ == "__main__":
    uvicorn.run(
        "college_predictor.main:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=True
    )
