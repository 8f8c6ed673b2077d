"""Chat endpoint for the ShopAssist API."""

import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from shopassist.api.dependencies import get_catalog
from shopassist.api.exceptions import InvalidRequestError
from shopassist.api.metrics import metrics_service
from shopassist.recommender.assistant import respond
from shopassist.recommender.catalog import Catalog

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/api",
    tags=["chat"],
)


class ChatRequest(BaseModel):
    """Chat message from the shopper.

    Clients may send extra context fields; they are accepted and ignored.
    """

    model_config = ConfigDict(extra="allow")

    message: Optional[str] = Field(default=None, description="The shopper's message")


@router.post("/chat")
def chat(body: ChatRequest, catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    """Reply to a chat message with a recommended product.

    Example:
        POST /api/chat {"message": "cheap winter jacket"}
    """
    if not body.message:
        raise InvalidRequestError("Message is required")

    start_time = time.time()
    reply = respond(catalog, body.message)
    latency_ms = (time.time() - start_time) * 1000
    metrics_service.record_recommendation(latency_ms, endpoint="chat")

    logger.info(
        "Chat reply generated",
        extra={"response_type": reply["type"], "latency_ms": round(latency_ms, 2)},
    )
    return reply
