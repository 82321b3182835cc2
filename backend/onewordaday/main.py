import asyncio

from fastapi import FastAPI

from .api.routes_status import router as status_router
from .api.routes_words import router as words_router
from .api.routes_word_bank import router as word_bank_router
from .api.routes_feedback import router as feedback_router
from .api.routes_profile import router as profile_router
from .config import settings
from .core.ai_generator import build_word_generator
from .core.daily_job import daily_generation_loop
from .core.database import Base, engine
from .logging_config import configure_logging


configure_logging()

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


@app.on_event("startup")
async def startup_event():
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Start daily word generation
    if settings.daily_job_enabled:
        generator = build_word_generator(settings) if settings.use_ai_generation else None
        asyncio.create_task(
            daily_generation_loop(generator, interval_seconds=settings.daily_job_interval_sec)
        )


app.include_router(status_router)
app.include_router(words_router)
app.include_router(word_bank_router)
app.include_router(feedback_router)
app.include_router(profile_router)
