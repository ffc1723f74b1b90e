# calibrator/main.py
import logging
import os

from dotenv import load_dotenv

# Before the routers import, so CALIBRATOR_* values from .env are visible
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.endpoints import calibration, tally

logging.basicConfig(
    level=os.getenv("CALIBRATOR_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CALIBRATOR_CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

app = FastAPI(title="Signal Calibrator", version="1.0.0")

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(calibration.router)
app.include_router(tally.router)

@app.get("/")
async def root():
    return {"message": "Signal Calibrator API", "version": "1.0.0"}

@app.get("/health")
async def health():
    return {"status": "healthy", "service": "calibrator"}
