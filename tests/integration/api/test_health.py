"""
Integration tests for health endpoints.
"""

import pytest
from django.urls import reverse


@pytest.mark.django_db
@pytest.mark.integration
class TestHealth:
    """Health endpoints need no API key."""

    def test_health(self, api_client):
        response = api_client.get(reverse("health"))

        assert response.status_code == 200
        assert response["X-Correlation-ID"]

    def test_ready(self, api_client):
        response = api_client.get(reverse("ready"))

        assert response.status_code == 200
