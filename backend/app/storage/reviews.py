"""
Reviews and the denormalized provider rating.
"""

from sqlalchemy import select, update, func

from app.core.actor import Actor
from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.core.metrics import record_review
from app.models.event import Event
from app.models.review import Review
from app.models.service_provider import ServiceProvider
from app.schemas.review import ReviewCreate
from app.storage.base import StorageBase

logger = get_logger(__name__)

REVIEW_TARGET_MODELS = {
    "event": Event,
    "service_provider": ServiceProvider,
}


class ReviewStore(StorageBase):

    async def create_review(self, actor: Actor, data: ReviewCreate) -> Review:
        """
        Insert a review written by the actor.

        For service provider targets the provider's rating (mean, 2 decimals)
        and review_count are recomputed from all of its reviews in the same
        transaction, so the aggregate always matches the reviews table.
        """
        target_model = REVIEW_TARGET_MODELS[data.target_type]

        async with self._transaction("create_review") as session:
            if await session.get(target_model, data.target_id) is None:
                raise self._fail(
                    NotFoundError(f"Review target not found: {data.target_type}"),
                    target_type=data.target_type,
                    target_id=data.target_id,
                )

            review = Review(
                reviewer_id=actor.user_id,
                target_type=data.target_type,
                target_id=data.target_id,
                rating=data.rating,
                comment=data.comment,
            )
            session.add(review)
            await session.flush()

            if data.target_type == "service_provider":
                await self._refresh_provider_rating(session, data.target_id)

        record_review(data.target_type)
        logger.info(
            "review_created",
            review_id=review.id,
            target_type=review.target_type,
            target_id=review.target_id,
            rating=review.rating,
            actor_id=actor.user_id,
        )
        return review

    @staticmethod
    async def _refresh_provider_rating(session, provider_id: str) -> None:
        provider_reviews = (
            Review.target_type == "service_provider",
            Review.target_id == provider_id,
        )
        average = select(func.round(func.avg(Review.rating), 2)).where(*provider_reviews).scalar_subquery()
        count = select(func.count(Review.id)).where(*provider_reviews).scalar_subquery()

        await session.execute(
            update(ServiceProvider)
            .where(ServiceProvider.id == provider_id)
            .values(rating=func.coalesce(average, 0), review_count=count)
            .execution_options(synchronize_session=False)
        )

    async def get_reviews(self, target_type: str, target_id: str) -> list[Review]:
        async with self._reader("get_reviews") as session:
            result = await session.execute(
                select(Review)
                .where(Review.target_type == target_type, Review.target_id == target_id)
                .order_by(Review.created_at.desc())
            )
            return list(result.scalars().all())
