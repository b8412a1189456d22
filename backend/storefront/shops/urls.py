from django.urls import path
from .views import ShopDetailView

urlpatterns = [
    path("<slug:slug>", ShopDetailView.as_view()),
    path("<slug:slug>/", ShopDetailView.as_view()),
]
