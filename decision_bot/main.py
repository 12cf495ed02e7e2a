import logging
from fastapi import FastAPI
from decision_bot.config import get_settings
from decision_bot.api.routes import decisions, slack

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for decision_bot modules
logger = logging.getLogger("decision_bot")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Slack decision log backed by a Notion database",
    version="0.1.0",
)

# Include routers
app.include_router(slack.router, prefix="/slack", tags=["Slack"])
app.include_router(decisions.router, prefix="/api/decisions", tags=["Decisions"])


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.app_name} - Slack decisions, logged to Notion",
        "version": "0.1.0",
        "endpoints": {
            "slack_events": "/slack/events",
            "decisions": "/api/decisions",
            "pending_deletions": "/api/decisions/pending",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
