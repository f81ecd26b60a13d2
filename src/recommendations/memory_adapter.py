"""Configurable in-process recommender for development and testing.

Records every trigger it receives and can be told to fail, so tests can
check that a failing refresh never affects checkout. ``get_recommender()``
returns the recommender checkout notifies.
"""

import asyncio

import structlog

from recommendations.port import Recommender

logger = structlog.get_logger(__name__)


class RecordingRecommender(Recommender):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Recommendation service unavailable"
        self.delay: float = 0.0
        self.triggered: list[str] = []

    def configure(self, should_succeed: bool, failure_reason: str | None = None, delay: float = 0.0) -> None:
        """Configure recommender behavior at runtime."""
        self.should_succeed = should_succeed
        if failure_reason is not None:
            self.failure_reason = failure_reason
        self.delay = delay

    async def trigger_recommendations(self, user_id: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)

        self.triggered.append(str(user_id))
        logger.info("recommendations_triggered", user_id=str(user_id))

        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)


_recommender: Recommender = RecordingRecommender()


def get_recommender() -> Recommender:
    return _recommender


def use_recommender(recommender: Recommender) -> None:
    global _recommender
    _recommender = recommender


def reset_recommender() -> None:
    use_recommender(RecordingRecommender())
