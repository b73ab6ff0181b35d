# marinemarket/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import init_db
from .routers import ads as ads_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Marine Marketplace")

# --- CORS ---
allowed_origins = (
    [o.strip() for o in settings.ALLOWED_ORIGINS.split(",")]
    if getattr(settings, "ALLOWED_ORIGINS", None)
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Подключение роутеров ---
app.include_router(ads_router.router)


@app.get("/health")
def health():
    return {"status": "ok"}


# --- Инициализация БД ---
@app.on_event("startup")
def on_startup():
    init_db()
