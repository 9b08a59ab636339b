"""Spot Summary - per-request derived fields for spot listings.

Invariants:
    - avgRating is the exact arithmetic mean of star values, 0 with no reviews
    - previewImage is the url of the LAST image flagged preview=True in
      iteration order, NO_PREVIEW_URL when none is flagged
    - Nothing computed here is persisted

Design Decisions:
    - Pure functions over the ORM collections: routes pass spot.images and
      spot.reviews, these functions never touch the session
"""

from typing import Iterable, Sequence

from app.core.domain_types import NO_PREVIEW_URL, PreviewCandidate, RatedLike


def compute_avg_rating(reviews: Sequence[RatedLike]) -> float:
    """Mean star rating, 0 for an unreviewed spot."""
    if not reviews:
        return 0
    return sum(r.stars for r in reviews) / len(reviews)


def select_preview_image(images: Iterable[PreviewCandidate]) -> str:
    """Url of the last preview-flagged image, or the no-preview literal."""
    preview_url = NO_PREVIEW_URL
    for image in images:
        if image.preview is True:
            preview_url = image.url
    return preview_url


def summarize_spot(
    spot_fields: dict,
    images: Iterable[PreviewCandidate],
    reviews: Sequence[RatedLike],
) -> dict:
    """Listing entry: scalar spot fields plus avg_rating and preview_image.

    Raw image/review collections are never part of the output.
    """
    return {
        **spot_fields,
        "avg_rating": compute_avg_rating(reviews),
        "preview_image": select_preview_image(images),
    }
