import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardledger.core.config import settings
from cardledger.api.routes.users import router as users_router
from cardledger.api.routes.cards import router as cards_router
from cardledger.api.routes.balances import router as balances_router
from cardledger.api.routes.reports import router as reports_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI()

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(users_router)
app.include_router(cards_router)
app.include_router(balances_router)
app.include_router(reports_router)
