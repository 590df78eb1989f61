# two_factor_service.py
"""
TOTP two-factor authentication.

Setup stores a fresh secret and returns an otpauth URL plus a QR code the
user scans with an authenticator app. The secret only starts guarding
logins once a code generated from it has been verified.
"""

import base64
import io

import pyotp
import qrcode
from django.conf import settings

from classifieds.exceptions import TwoFactorError
from classifiedsutils.log_helpers import log_auth_event


class TwoFactorService:
    @staticmethod
    def _qr_data_url(uri: str) -> str:
        buffer = io.BytesIO()
        qrcode.make(uri).save(buffer)
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    @staticmethod
    def setup(user) -> dict:
        """Generate and store a new secret for a user without 2FA enabled."""
        if user.two_factor_enabled:
            raise TwoFactorError("Two-factor authentication is already enabled")

        secret = pyotp.random_base32()
        user.two_factor_secret = secret
        user.save(update_fields=["two_factor_secret", "updated_at"])

        otpauth_url = pyotp.TOTP(secret).provisioning_uri(
            name=user.email,
            issuer_name=getattr(settings, "TWO_FACTOR_ISSUER", "Classifieds"),
        )
        return {
            "secret": secret,
            "otpauth_url": otpauth_url,
            "qr_code": TwoFactorService._qr_data_url(otpauth_url),
        }

    @staticmethod
    def verify_token(user, token) -> bool:
        """Check a 6-digit code, allowing one step of clock drift."""
        if not user.two_factor_secret or not token:
            return False
        return pyotp.TOTP(user.two_factor_secret).verify(
            str(token).strip(), valid_window=1
        )

    @staticmethod
    def enable(user, token) -> None:
        if not user.two_factor_secret:
            raise TwoFactorError("Two-factor setup has not been started")
        if not TwoFactorService.verify_token(user, token):
            log_auth_event(
                "2fa_enable", user_id=user.user_id, success=False,
                failure_reason="invalid_token",
            )
            raise TwoFactorError("Invalid verification code")

        user.two_factor_enabled = True
        user.save(update_fields=["two_factor_enabled", "updated_at"])
        log_auth_event("2fa_enable", user_id=user.user_id)

    @staticmethod
    def disable(user, token) -> None:
        if not user.two_factor_enabled:
            raise TwoFactorError("Two-factor authentication is not enabled")
        if not TwoFactorService.verify_token(user, token):
            log_auth_event(
                "2fa_disable", user_id=user.user_id, success=False,
                failure_reason="invalid_token",
            )
            raise TwoFactorError("Invalid verification code")

        user.two_factor_enabled = False
        user.two_factor_secret = None
        user.save(update_fields=["two_factor_enabled", "two_factor_secret", "updated_at"])
        log_auth_event("2fa_disable", user_id=user.user_id)
