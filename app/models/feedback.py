"""Request/response models for feedback."""

from app.models.base import ApiModel


class Feedback(ApiModel):
    news_id: int
    rating: int
    comment: str
    suggestions: str


class FeedbackData(ApiModel):
    """Response wrapper for GET /feedback."""

    feedback: list[Feedback]
