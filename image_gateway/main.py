from __future__ import annotations

from fastapi import FastAPI

from image_gateway.handlers import image_handler
from image_gateway.models import HealthStatus

app = FastAPI(title="Image Gateway")

app.include_router(image_handler.router)


@app.get("/health", response_model=HealthStatus)
async def health():
    return HealthStatus()
