from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .auth_api import (
    GetUserAPI,
    LoginAPI,
    RegisterUserAPI,
    TwoFactorDisableAPI,
    TwoFactorSetupAPI,
    TwoFactorVerifyAPI,
)

urlpatterns = [
    path("register/", RegisterUserAPI.as_view(), name="register"),
    path("login/", LoginAPI.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("user/", GetUserAPI.as_view(), name="get_user"),
    # Two-factor authentication
    path("2fa/setup/", TwoFactorSetupAPI.as_view(), name="two_factor_setup"),
    path("2fa/verify/", TwoFactorVerifyAPI.as_view(), name="two_factor_verify"),
    path("2fa/disable/", TwoFactorDisableAPI.as_view(), name="two_factor_disable"),
]
