"""
Slack Events API Routes

POST /slack/events receives app_mention events. Mentions are acknowledged
immediately and handled in a background task.
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from decision_bot.integrations.slack import SlackRequestVerifier, parse_mention_event
from decision_bot.services.dependencies import get_mention_handler, get_request_verifier
from decision_bot.services.mention_handler import MentionHandler

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    verifier: SlackRequestVerifier = Depends(get_request_verifier),
    handler: MentionHandler = Depends(get_mention_handler),
):
    """
    Slack Events API endpoint.

    - url_verification: echo the challenge
    - Signed event_callback with app_mention: schedule handling, return 200
    - Retried deliveries: acknowledge and drop
    """
    body = await request.body()
    try:
        payload = json.loads(body or b"{}")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Expected a JSON object")

    if payload.get("type") == "url_verification":
        logger.info("Answering Slack url_verification challenge")
        return {"challenge": payload.get("challenge")}

    if not verifier.verify(body, request.headers):
        logger.warning("Rejected Slack request with invalid signature")
        raise HTTPException(status_code=401, detail="Invalid Slack signature")

    retry_num = request.headers.get("x-slack-retry-num")
    if retry_num is not None:
        logger.info(
            f"Dropping Slack retry #{retry_num} ({request.headers.get('x-slack-retry-reason')})"
        )
        return {"status": "ok"}

    event = parse_mention_event(payload)
    if event is None:
        return {"status": "ignored"}

    logger.info(f"Received mention in {event.channel} (thread {event.thread_locator})")
    background_tasks.add_task(handler.handle, event)
    return {"status": "ok"}
