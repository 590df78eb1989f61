"""
Tests for TOTP two-factor authentication: the service and the login flow.
"""

import pyotp
import pytest
from django.urls import reverse
from rest_framework import status

from classifieds.exceptions import TwoFactorError


@pytest.fixture
def two_factor_user(test_user):
    """test_user with verified two-factor authentication."""
    from classifieds.services.two_factor_service import TwoFactorService

    secret = TwoFactorService.setup(test_user)["secret"]
    TwoFactorService.enable(test_user, pyotp.TOTP(secret).now())
    test_user.refresh_from_db()
    return test_user


@pytest.mark.unit
class TestTwoFactorService:
    def test_setup(self, test_user):
        from classifieds.services.two_factor_service import TwoFactorService

        setup = TwoFactorService.setup(test_user)
        test_user.refresh_from_db()

        assert test_user.two_factor_secret == setup["secret"]
        assert test_user.two_factor_enabled is False
        assert setup["otpauth_url"].startswith("otpauth://totp/")
        assert "issuer=Classifieds" in setup["otpauth_url"]
        assert setup["qr_code"].startswith("data:image/png;base64,")

    def test_enable_with_valid_code(self, two_factor_user):
        assert two_factor_user.two_factor_enabled is True

    def test_enable_with_invalid_code(self, test_user):
        from classifieds.services.two_factor_service import TwoFactorService

        TwoFactorService.setup(test_user)
        with pytest.raises(TwoFactorError):
            TwoFactorService.enable(test_user, "000000")
        test_user.refresh_from_db()
        assert test_user.two_factor_enabled is False

    def test_enable_without_setup(self, test_user):
        from classifieds.services.two_factor_service import TwoFactorService

        with pytest.raises(TwoFactorError):
            TwoFactorService.enable(test_user, "123456")

    def test_setup_twice_after_enable(self, two_factor_user):
        from classifieds.services.two_factor_service import TwoFactorService

        with pytest.raises(TwoFactorError):
            TwoFactorService.setup(two_factor_user)

    def test_disable(self, two_factor_user):
        from classifieds.services.two_factor_service import TwoFactorService

        code = pyotp.TOTP(two_factor_user.two_factor_secret).now()
        TwoFactorService.disable(two_factor_user, code)
        two_factor_user.refresh_from_db()

        assert two_factor_user.two_factor_enabled is False
        assert two_factor_user.two_factor_secret is None

    def test_verify_token_rejects_empty(self, two_factor_user):
        from classifieds.services.two_factor_service import TwoFactorService

        assert TwoFactorService.verify_token(two_factor_user, "") is False
        assert TwoFactorService.verify_token(two_factor_user, None) is False


@pytest.mark.unit
class TestTwoFactorAPI:
    def test_setup_and_verify(self, auth_client):
        client = auth_client["client"]

        response = client.post(reverse("two_factor_setup"))
        assert response.status_code == status.HTTP_200_OK
        secret = response.data["data"]["secret"]

        response = client.post(
            reverse("two_factor_verify"),
            {"token": pyotp.TOTP(secret).now()},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["two_factor_enabled"] is True

    def test_verify_requires_token(self, auth_client):
        response = auth_client["client"].post(reverse("two_factor_verify"), {})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_verify_wrong_code(self, auth_client):
        client = auth_client["client"]
        client.post(reverse("two_factor_setup"))

        response = client.post(
            reverse("two_factor_verify"), {"token": "000000"}, format="json"
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Invalid verification code"

    def test_login_requires_code(self, api_client, two_factor_user):
        response = api_client.post(
            reverse("login"),
            {"email": two_factor_user.email, "password": "testpass123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["two_factor_required"] is True
        assert "access" not in response.data

    def test_login_with_code(self, api_client, two_factor_user):
        response = api_client.post(
            reverse("login"),
            {
                "email": two_factor_user.email,
                "password": "testpass123",
                "otp_token": pyotp.TOTP(two_factor_user.two_factor_secret).now(),
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

    def test_disable_via_api(self, two_factor_user, auth_client):
        client = auth_client["client"]
        response = client.post(
            reverse("two_factor_disable"),
            {"token": pyotp.TOTP(two_factor_user.two_factor_secret).now()},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        two_factor_user.refresh_from_db()
        assert two_factor_user.two_factor_enabled is False
