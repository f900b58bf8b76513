"""FastAPI application entry point.

Serve with ``uvicorn loancalc.api.app:app``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loancalc.api.routes import schedule
from loancalc.config import settings

app = FastAPI(
    title="Loan Calculator",
    description="Amortization schedule, total cost and APR of installment loans",
    version="0.1.0",
    debug=settings.debug,
)

# The dashboard and other local front ends call the API from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(schedule.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
