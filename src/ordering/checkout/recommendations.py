"""Refreshes a user's recommendations after each checkout.

Runs after the checkout has already succeeded, as a detached task, so a slow
or failing recommender never delays or fails the checkout. Failures are
logged by the task tracker.
"""

import asyncio

from ordering.domain import background, logger
from recommendations.memory_adapter import get_recommender


def refresh_recommendations(user_id: str) -> asyncio.Task:
    logger.info("recommendations_refreshing", user_id=user_id)
    return background.spawn(
        get_recommender().trigger_recommendations(user_id),
        task_type="recommendation_refresh",
    )
