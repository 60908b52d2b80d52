from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import configure_logging, run_startup_checks

# ========== Authentication ==========
from modules.members.routes import router as auth_router

# ========== Reservations & Waitings ==========
from modules.reservations.routes import router as reservation_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    run_startup_checks()
    yield


app = FastAPI(
    title="Roomescape - Reservation API",
    description="""
    Escape room reservation backend.

    ## Features

    * **Reservations** - List, create and delete reservations
    * **Waitings** - Requests for a taken slot are queued; deleting a reservation
      promotes the earliest waiting member
    * **Admin** - Book on behalf of members and inspect the waiting queue

    ## Authentication

    `POST /login` sets a `token` cookie that the other endpoints read.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(reservation_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
