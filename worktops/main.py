from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import quotations, exports

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("worktops")

app = FastAPI(
    title="Worktop Quoting App",
    description="Kitchen worktop pricing with sink/hob cut-outs and isometric preview",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(quotations.router, prefix="/api")
app.include_router(exports.router, prefix="/api")

logger.info("Worktop quoting app ready (%s)", settings.COMPANY_NAME)


@app.get("/health")
def health():
    return {"status": "ok", "app": "worktop-quoting-app"}
