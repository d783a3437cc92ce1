# promptshare/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from promptshare.api.routes import (
    auth_routes,
    category_routes,
    prompt_routes,
    root_routes,
    vote_routes,
)
from promptshare.core.config import settings
from promptshare.core.startup import shutdown_event, startup_event

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="promptshare",
    description="Share, browse and upvote text prompts",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS
)

app.include_router(root_routes.router)
app.include_router(auth_routes.router, prefix="/api/auth")
app.include_router(category_routes.router, prefix="/api/categories")
app.include_router(prompt_routes.router, prefix="/api/prompts")
app.include_router(vote_routes.router, prefix="/api")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


@app.on_event("startup")
async def app_startup():
    await startup_event(app)


@app.on_event("shutdown")
async def app_shutdown():
    await shutdown_event(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
