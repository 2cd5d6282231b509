# main.py

import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from pushframe.deps import setup_logging
from pushframe.limits import limiter
from pushframe.push.push import router as push_router

app = FastAPI(title="pushframe - APNs frame encoder")

# rate-limiter
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )

app.include_router(push_router)

setup_logging()
logger = logging.getLogger("uvicorn")


@app.on_event("startup")
async def startup():
    logger.info("✅ pushframe ready")


# simple healthcheck
@app.get("/health")
async def health():
    return {"status": "ok"}
