"""
URL configuration for sku catalog endpoints.
"""
from django.urls import path

from api.v1.skus import views

urlpatterns = [
    path("sku", views.SkuListView.as_view(), name="sku-list"),
    path("sku/name/<str:name>", views.SkuByNameView.as_view(), name="sku-by-name"),
    path("sku/<str:code>", views.SkuDetailView.as_view(), name="sku-detail"),
]
