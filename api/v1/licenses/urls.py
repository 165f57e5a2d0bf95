"""
URL configuration for license endpoints.
"""
from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("licenses", views.LicenseListView.as_view(), name="license-list"),
    path("licenses/validate", views.ValidateTokenView.as_view(), name="license-validate"),
    path(
        "licenses/customer/<str:customer_id>",
        views.CustomerLicenseListView.as_view(),
        name="customer-license-list",
    ),
    path("licenses/<str:license_id>", views.LicenseDetailView.as_view(), name="license-detail"),
]
