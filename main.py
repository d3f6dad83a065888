# main.py
import logging
import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import get_settings
from database import Database
from routes import health, users, courses, notes, classrooms

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(db: Database = None) -> FastAPI:
    """Assemble the API. `db` is connected on startup unless it is already bound."""
    app = FastAPI(title="Study Hub API")
    app.state.db = db or Database()

    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"{request.method} {request.url.path} error")
            return JSONResponse(status_code=500, content={"error": "Internal server error."})

    # Added after the error middleware so 500 responses still get CORS headers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(request: Request, exc: RequestValidationError):
        fields = sorted({".".join(str(part) for part in error["loc"][1:]) or "body" for error in exc.errors()})
        return JSONResponse(status_code=400, content={"error": f"Invalid request body: {', '.join(fields)}."})

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(courses.router)
    app.include_router(notes.router)
    app.include_router(classrooms.router)

    # Must stay last: answers every path/verb no router claimed.
    @app.api_route("/{path:path}", methods=ROUTE_METHODS, include_in_schema=False)
    async def route_not_found(request: Request, path: str):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "path": request.url.path,
                "method": request.method,
                "message": "Make sure the server is running and the route is correct",
            },
        )

    @app.on_event("startup")
    async def startup_event():
        if app.state.db.ready:
            return
        settings = get_settings()
        await app.state.db.connect(settings)
        logger.info(f"Health check: http://localhost:{settings.port}/health")

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.db.close()

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port)
