# storefront/config/urls.py
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/phone/", include("storefront.phone_auth.urls")),
    path("api/customer/", include("storefront.customers.urls")),
    path("api/shops/", include("storefront.shops.urls")),
    path("api/shops/", include("storefront.orders.urls")),
]
