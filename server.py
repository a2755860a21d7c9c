"""
Trivia Server - Quizzes, cursos e partidas para plataformas de chat

FastAPI server with:
- Draft authoring of quizzes and courses
- Solo and party game sessions
- Persistence via KV store (memory or AgentFS)
- Achievements via badges service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app_state
from trivia.config import QuizConfig
from trivia.logger import get_logger, setup_logging
from trivia.router import register_exception_handlers, routers

config = QuizConfig.from_env()
setup_logging(config.log_level)
logger = get_logger("server")


# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info("Starting Trivia...")
    await app_state.init(config)
    yield
    await app_state.cleanup()
    logger.info("Trivia stopped")


app = FastAPI(
    title="Trivia",
    description="Quiz and course engine for chat platforms",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for router in routers:
    app.include_router(router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok",
        "message": "Trivia v1",
        "kv_backend": app_state.config.kv_backend,
        "auth_enabled": app_state.config.auth_enabled,
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    store_ready = app_state.store is not None
    return {
        "status": "healthy" if store_ready else "starting",
        "kv_backend": app_state.config.kv_backend,
        "store": "ready" if store_ready else "not_initialized",
        "badges": bool(app_state.config.badges_url),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
