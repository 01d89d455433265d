from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

# ✅ logging: level from settings, noisy HTTP libraries quieted
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import analysis, attendance, exports, grades, weight_settings

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency header (X-Latency-Ms)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (consistent JSON error shape)
add_error_handlers(app)

# ✅ /v1 prefix
app.include_router(grades.router,          prefix="/v1")
app.include_router(analysis.router,        prefix="/v1")
app.include_router(attendance.router,      prefix="/v1")
app.include_router(weight_settings.router, prefix="/v1")
app.include_router(exports.router,         prefix="/v1")

# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ root
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - {settings.APP_DESCRIPTION}"}
