# storefront/shops/views.py
from rest_framework.views import APIView

from storefront.common.responses import ok, fail
from .serializers import ShopItemSerializer, ShopSerializer
from .services import find_published_shop


class ShopDetailView(APIView):
    # GET /api/shops/<slug>
    authentication_classes = []
    permission_classes = []

    def get(self, request, slug: str):
        profile = find_published_shop(slug)
        if not profile:
            return fail("SHOP_NOT_FOUND", "shop not found", 404)

        items = profile.items.filter(is_active=True).order_by("sort_order", "created_at")
        data = ShopSerializer(profile).data
        data["items"] = ShopItemSerializer(items, many=True).data
        return ok(data)
