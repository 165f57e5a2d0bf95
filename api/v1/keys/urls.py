"""
URL configuration for key pair endpoints.
"""
from django.urls import path

from api.v1.keys import views

urlpatterns = [
    path("keys", views.KeyListView.as_view(), name="key-list"),
    path("keys/<str:key_id>", views.KeyDetailView.as_view(), name="key-detail"),
    path(
        "keys/<str:key_id>/download/public",
        views.PublicKeyDownloadView.as_view(),
        name="key-download-public",
    ),
    path(
        "keys/<str:key_id>/download/private",
        views.PrivateKeyDownloadView.as_view(),
        name="key-download-private",
    ),
]
