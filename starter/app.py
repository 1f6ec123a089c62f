import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from starter.core.request_context import RequestContextMiddleware
from starter.modules.database import connect_to_db, disconnect_from_db, database
from starter.modules.migration_runner import run_migrations
from starter.modules.users.api import router as account_router

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_db()
    await run_migrations(database)
    yield
    # Shutdown
    await disconnect_from_db()

app = FastAPI(title="Starter", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

app.include_router(account_router)

@app.get("/")
async def root():
    return {"status": "online", "system": "Starter"}
