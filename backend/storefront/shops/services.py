from typing import Optional

from django.db.models import Q

from .models import Profile


def find_published_shop(slug: str) -> Optional[Profile]:
    # slug is the shop slug, or the seller's username when no slug was chosen
    return (
        Profile.objects.filter(Q(shop_slug=slug) | Q(username=slug), is_published=True)
        .order_by("created_at")
        .first()
    )
