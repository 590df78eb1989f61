from django.utils import timezone
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from classifieds.models import User
from classifieds.permissions import IsUserAccess
from classifieds.serializers.auth_serializers import RegisterSerializer, UserSerializer
from classifieds.services.two_factor_service import TwoFactorService
from classifiedsutils.log_helpers import log_auth_event


def issue_tokens(user) -> dict:
    """Refresh/access pair carrying the ``user_id`` and ``role`` claims."""
    refresh = RefreshToken.for_user(user)
    refresh["user_id"] = user.user_id
    refresh["role"] = user.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


token_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "refresh": openapi.Schema(type=openapi.TYPE_STRING, description="Refresh token"),
        "access": openapi.Schema(type=openapi.TYPE_STRING, description="Access token"),
        "user_id": openapi.Schema(type=openapi.TYPE_INTEGER, description="User ID"),
        "role": openapi.Schema(type=openapi.TYPE_STRING, description="User role"),
        "user": openapi.Schema(type=openapi.TYPE_OBJECT, description="User profile"),
    },
)

otp_body = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "token": openapi.Schema(
            type=openapi.TYPE_STRING, description="6-digit authenticator code"
        ),
    },
    required=["token"],
)


class RegisterUserAPI(APIView):
    """Create a marketplace account and sign it in."""

    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_summary="Register",
        request_body=RegisterSerializer,
        responses={201: token_schema, 400: "Validation error"},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid registration data", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = serializer.save()
        log_auth_event("register", user_id=user.user_id, email=user.email)

        return Response(
            {
                **issue_tokens(user),
                "user_id": user.user_id,
                "role": user.role,
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginAPI(APIView):
    """
    Email/password login.

    Accounts with two-factor enabled must also send ``otp_token``; without
    a valid one the response is 401 with ``two_factor_required: true``.
    """

    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_summary="Login API",
        operation_description="Returns JWT tokens along with the user profile.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "email": openapi.Schema(
                    type=openapi.TYPE_STRING, description="User's email"
                ),
                "password": openapi.Schema(
                    type=openapi.TYPE_STRING, description="User's password"
                ),
                "otp_token": openapi.Schema(
                    type=openapi.TYPE_STRING,
                    description="Authenticator code, required when 2FA is enabled",
                ),
            },
            required=["email", "password"],
        ),
        responses={
            200: token_schema,
            400: "Email and password are required",
            401: "Invalid credentials or two-factor code",
        },
    )
    def post(self, request):
        email = (request.data.get("email") or "").strip().lower()
        password = request.data.get("password")

        if not email or not password:
            return Response(
                {"error": "Email and password are required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = User.objects.filter(
            email__iexact=email, is_active=1, is_deleted=0
        ).first()
        if user is None or not user.check_password(password):
            log_auth_event(
                "login", email=email, success=False, failure_reason="invalid_credentials"
            )
            return Response(
                {"error": "Invalid email or password."},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        if user.two_factor_enabled:
            otp_token = request.data.get("otp_token")
            if not TwoFactorService.verify_token(user, otp_token):
                log_auth_event(
                    "login",
                    user_id=user.user_id,
                    success=False,
                    failure_reason="invalid_otp" if otp_token else "otp_required",
                )
                return Response(
                    {
                        "error": "Two-factor authentication code required."
                        if not otp_token
                        else "Invalid two-factor authentication code.",
                        "two_factor_required": True,
                    },
                    status=status.HTTP_401_UNAUTHORIZED,
                )

        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        log_auth_event("login", user_id=user.user_id, email=user.email)

        return Response(
            {
                **issue_tokens(user),
                "user_id": user.user_id,
                "role": user.role,
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class GetUserAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Profile of the signed-in user.",
        responses={200: UserSerializer, 401: "Unauthorized"},
    )
    def get(self, request):
        return Response(
            {"message": "User retrieved successfully", "data": UserSerializer(request.user).data},
            status=status.HTTP_200_OK,
        )


class TwoFactorSetupAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description=(
            "Generate a TOTP secret. Returns the secret, the otpauth URL and a "
            "QR code as a PNG data URL."
        ),
        responses={200: "Setup data", 400: "Two-factor already enabled"},
    )
    def post(self, request):
        setup = TwoFactorService.setup(request.user)
        return Response(
            {
                "message": "Scan the QR code and verify a code to enable two-factor authentication.",
                "data": setup,
            },
            status=status.HTTP_200_OK,
        )


class TwoFactorVerifyAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Verify a code from the authenticator app and enable 2FA.",
        request_body=otp_body,
        responses={200: "Two-factor enabled", 400: "Invalid code or setup missing"},
    )
    def post(self, request):
        token = request.data.get("token")
        if not token:
            return Response(
                {"error": "Verification code is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        TwoFactorService.enable(request.user, token)
        return Response(
            {"message": "Two-factor authentication enabled.", "data": {"two_factor_enabled": True}},
            status=status.HTTP_200_OK,
        )


class TwoFactorDisableAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Verify a code and turn two-factor authentication off.",
        request_body=otp_body,
        responses={200: "Two-factor disabled", 400: "Invalid code"},
    )
    def post(self, request):
        token = request.data.get("token")
        if not token:
            return Response(
                {"error": "Verification code is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        TwoFactorService.disable(request.user, token)
        return Response(
            {"message": "Two-factor authentication disabled.", "data": {"two_factor_enabled": False}},
            status=status.HTTP_200_OK,
        )
