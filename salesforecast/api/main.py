"""
SalesForecast FastAPI Application.

This module serves next-month unit-sales forecasts from the saved product
model via REST endpoints.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from salesforecast.config import MODEL_PATH, MODEL_VERSION
from salesforecast.data_ingestion.product_data import ProductData
from salesforecast.training.product_model import load_model, predict as predict_units

# Global model state
model = None
model_loaded = False


class PredictionRequest(BaseModel):
    """Request schema for a product unit-sales forecast."""

    productId: str = Field(..., description="Product identifier")
    year: int = Field(..., description="Calendar year of the observed month")
    month: int = Field(..., ge=1, le=12, description="Observed month (1-12)")
    units: float = Field(..., ge=0, description="Units sold in the month")
    avg: float = Field(..., description="Average units per order line")
    count: float = Field(..., ge=0, description="Number of order lines")
    max: float = Field(..., description="Largest order line")
    min: float = Field(..., description="Smallest order line")
    prev: float = Field(..., ge=0, description="Units sold in the previous month")


class PredictionResponse(BaseModel):
    """Response schema for a product unit-sales forecast."""

    score: float = Field(..., description="Forecast units for the following month")
    model_version: str = Field(..., description="Model version identifier")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load model on startup."""
    global model, model_loaded

    model_path = Path(MODEL_PATH)
    try:
        if model_path.exists():
            model = load_model(model_path)
            model_loaded = True
            print(f"Model loaded from {model_path}")
        else:
            print("Warning: Model file not found, prediction endpoint will be unavailable")
    except Exception as e:
        print(f"Error loading model: {e}")

    yield

    model = None
    model_loaded = False


app = FastAPI(
    title="SalesForecast API",
    description="Per-product monthly unit-sales forecasting API",
    version=MODEL_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "model_loaded": model_loaded}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "SalesForecast API",
        "version": MODEL_VERSION,
        "description": "Product Unit Sales Forecasting API",
        "docs_url": "/docs",
    }


@app.post("/predict", response_model=PredictionResponse)
async def predict(request: PredictionRequest):
    """Forecast next month's units for one product-month."""
    if not model_loaded:
        raise HTTPException(status_code=503, detail="Model not loaded")

    sample = ProductData(**request.model_dump())
    prediction = predict_units(model, [sample])[0]

    return PredictionResponse(
        score=round(prediction.score, 2),
        model_version=MODEL_VERSION,
    )
