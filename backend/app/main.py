import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.db_connection import db_connection
from app.core.exceptions import PlaceParserError
from app.core.logger import logs
from app.routes.caption_route import router as caption_router
from app.routes.geocode_route import router as geocode_router
from app.routes.places_route import router as places_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    db_connection.close()

app = FastAPI(title="Reel Places API", lifespan=lifespan)
app.include_router(caption_router)
app.include_router(geocode_router)
app.include_router(places_router)

# --- Error envelopes: {"success": false, "error": ...} ---
@app.exception_handler(PlaceParserError)
async def place_parser_error_handler(request: Request, exc: PlaceParserError):
    logs.log(logging.WARNING, f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    logs.log(logging.WARNING, f"{request.method} {request.url.path} -> 400: {message}")
    return JSONResponse(status_code=400, content={"success": False, "error": message})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logs.log(logging.ERROR, f"Unhandled error in {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"success": False, "error": "internal server error"})

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Reel Places API is running",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "parse_reel": "/api/parse-reel",
            "geocode": "/api/geocode",
            "places": "/api/places",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Reel Places API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
