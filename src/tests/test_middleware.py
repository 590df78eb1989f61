"""
Tests for request middleware, throttling and logging helpers.
"""

import pytest
from django.test import RequestFactory, override_settings
from django.urls import reverse
from rest_framework import status


@pytest.mark.unit
class TestAPIRateLimitMiddleware:
    @override_settings(RATE_LIMIT_REQUESTS=3, RATE_LIMIT_WINDOW_SECONDS=60)
    def test_limit_per_ip(self, api_client):
        url = reverse("list_categories")

        for _ in range(3):
            assert api_client.get(url).status_code == status.HTTP_200_OK

        response = api_client.get(url)
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {
            "error": "Too many requests from this IP, please try again later."
        }
        assert response["Retry-After"] == "60"

    @override_settings(RATE_LIMIT_REQUESTS=1)
    def test_separate_counters_per_ip(self, api_client):
        url = reverse("list_categories")

        assert api_client.get(url, REMOTE_ADDR="10.0.0.1").status_code == 200
        assert api_client.get(url, REMOTE_ADDR="10.0.0.2").status_code == 200
        assert api_client.get(url, REMOTE_ADDR="10.0.0.1").status_code == 429

    @override_settings(RATE_LIMIT_REQUESTS=1)
    def test_non_api_paths_not_limited(self, api_client):
        for _ in range(3):
            response = api_client.get("/swagger.json")
            assert response.status_code == status.HTTP_200_OK

    @override_settings(RATE_LIMIT_REQUESTS=1, RATE_LIMIT_ENABLED=False)
    def test_disabled(self, api_client):
        url = reverse("list_categories")
        for _ in range(3):
            assert api_client.get(url).status_code == status.HTTP_200_OK


@pytest.mark.unit
class TestStructlogMiddleware:
    def test_request_id_echoed(self, api_client):
        response = api_client.get(
            reverse("list_categories"), HTTP_X_REQUEST_ID="req-123"
        )
        assert response["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, api_client):
        response = api_client.get(reverse("list_categories"))
        assert response["X-Request-ID"]


@pytest.mark.unit
class TestListingCreateRateThrottle:
    def test_parse_rate_with_multiplier(self):
        from classifieds.throttling import ListingCreateRateThrottle

        throttle = ListingCreateRateThrottle()
        assert throttle.parse_rate("5/15m") == (5, 900)
        assert throttle.parse_rate("10/h") == (10, 3600)
        assert throttle.parse_rate("100/2d") == (100, 172800)

    def test_parse_rate_rejects_unknown_unit(self):
        from classifieds.throttling import ListingCreateRateThrottle

        with pytest.raises(ValueError):
            ListingCreateRateThrottle().parse_rate("5/15w")


@pytest.mark.unit
class TestLogHelpers:
    def test_client_ip_prefers_forwarded_for(self):
        from classifiedsutils.log_helpers import get_client_ip

        request = RequestFactory().get(
            "/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1", REMOTE_ADDR="10.0.0.1"
        )
        assert get_client_ip(request) == "203.0.113.9"

    def test_client_ip_falls_back_to_remote_addr(self):
        from classifiedsutils.log_helpers import get_client_ip

        request = RequestFactory().get("/", REMOTE_ADDR="198.51.100.4")
        assert get_client_ip(request) == "198.51.100.4"


@pytest.mark.unit
class TestLoggingConfig:
    def test_standard_config_has_app_logger(self, settings, tmp_path):
        from classifiedsutils.logging import APP_NAME, get_standard_logging_config

        settings.BASE_DIR = tmp_path
        config = get_standard_logging_config()

        assert APP_NAME in config["loggers"]
        assert config["formatters"]["json"]["()"] == (
            "pythonjsonlogger.jsonlogger.JsonFormatter"
        )
        assert (tmp_path / "logs").is_dir()

    def test_log_level_from_settings(self, settings):
        import logging

        from classifiedsutils.logging import get_log_level

        settings.LOG_LEVEL = "warning"
        assert get_log_level() == logging.WARNING
        settings.LOG_LEVEL = "nonsense"
        assert get_log_level() == logging.INFO
