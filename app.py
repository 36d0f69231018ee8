"""
Main application file for the timecard service.
Exposes the day-summary calculation and the shift catalog over HTTP.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI

from config import config
from routes.shifts import list_shifts, shift_detail
from routes.summary import DaySummaryRequest, day_summary
from utils.error_handler import (
    TimecardError,
    handle_application_error,
    handle_unexpected_error,
)

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

# FastAPI app setup
app = FastAPI(title="Timecard", version=config.VERSION)

app.add_exception_handler(TimecardError, handle_application_error)
app.add_exception_handler(Exception, handle_unexpected_error)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": config.VERSION}


@app.post("/api/day-summary")
def day_summary_route(payload: DaySummaryRequest):
    """Work summary and per-interval breakdown for one day."""
    return day_summary(payload)


@app.get("/api/shifts")
def list_shifts_route():
    """Configured shift catalog."""
    return list_shifts()


@app.get("/api/shifts/{shift_id}")
def shift_detail_route(shift_id: str):
    """Single shift with display details."""
    return shift_detail(shift_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG
    )
