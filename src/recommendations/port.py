"""Recommendation trigger port (abstract interface).

After a checkout the user's recommendations are refreshed from their order
history. How recommendations are computed is the adapter's concern; callers
only send the notification.
"""

from abc import ABC, abstractmethod


class Recommender(ABC):
    @abstractmethod
    async def trigger_recommendations(self, user_id: str) -> None:
        """Ask for the user's recommendations to be recomputed."""
        ...
