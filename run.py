"""
Uvicorn server runner for the decision bot.

Usage:
    python run.py

Environment variables (set in .env file):
    DEBUG=true - Enable debug logging
    HOST=0.0.0.0 - Bind address (default: 127.0.0.1)
    PORT=3000 - Listening port (default: 8000)
    RELOAD=true - Restart on code changes (development only)

Slack must be able to reach POST /slack/events on this server.
"""

import uvicorn
from decision_bot.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} on {settings.host}:{settings.port} (log level: {log_level})")
    print(f"Slack events endpoint: http://{settings.host}:{settings.port}/slack/events")

    uvicorn.run(
        "decision_bot.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=log_level,
        access_log=True,
    )
