from django.urls import path
from .views import ShopBookingCreateView, ShopCheckoutView

urlpatterns = [
    path("<slug:slug>/orders", ShopCheckoutView.as_view()),
    path("<slug:slug>/orders/", ShopCheckoutView.as_view()),
    path("<slug:slug>/bookings", ShopBookingCreateView.as_view()),
    path("<slug:slug>/bookings/", ShopBookingCreateView.as_view()),
]
