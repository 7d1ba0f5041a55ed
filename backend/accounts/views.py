"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``RegisterView``  — POST /register/
- ``LoginView``     — POST /login/
- ``UserViewSet``   — GET /users/, PUT /users/{id}/role/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .permissions import IsAdminRole
from .serializers import (
    ChangeRoleSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    RegisterRequestSerializer,
    UserSerializer,
)
from .services import (
    AuthenticationService,
    UserManagementService,
    UserRegistrationService,
)


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class RegisterView(APIView):
    """
    POST /api/register/

    Public endpoint.  Creates a new user (default role ``user``).

    Request body  → ``RegisterRequestSerializer``
    Response body → ``{"message": ..., "user": UserSerializer}`` (201)
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register",
        request=RegisterRequestSerializer,
        responses={
            201: OpenApiResponse(response=UserSerializer, description="User registered."),
            400: OpenApiResponse(description="Missing fields, invalid role, or e-mail already in use."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserRegistrationService.register_user(serializer.validated_data)
        return Response(
            {
                "message": "User registered successfully",
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST /api/login/

    Public endpoint.  Authenticates by e-mail + password and returns a
    one-hour bearer token together with the user's role.

    Flow:
        1. Validate input via ``LoginRequestSerializer``.
        2. Delegate to ``AuthenticationService.login()``.
        3. Invalid credentials surface as ``InvalidCredential`` → 401.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Login",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=LoginResponseSerializer, description="Token issued."),
            400: OpenApiResponse(description="Email and password are required."),
            401: OpenApiResponse(description="Invalid credentials."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = AuthenticationService.login(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            request=request,
        )
        return Response(LoginResponseSerializer(payload).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  User Management ViewSet
# ═══════════════════════════════════════════════════════════════════


class UserViewSet(viewsets.ViewSet):
    """
    /api/users/

    Administrative user management.  Admin role required for every
    action; ``UserManagementService`` repeats the check.
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="List users",
        parameters=[
            OpenApiParameter(name="role", type=str, location=OpenApiParameter.QUERY, description="Filter by role."),
        ],
        responses={200: OpenApiResponse(response=UserSerializer(many=True), description="All users.")},
        tags=["Accounts"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/users/"""
        users = UserManagementService.list_users(
            request.user,
            role=request.query_params.get("role") or None,
        )
        return Response(UserSerializer(users, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Change a user's role",
        request=ChangeRoleSerializer,
        responses={
            200: OpenApiResponse(response=UserSerializer, description="Role updated."),
            400: OpenApiResponse(description="Invalid role."),
            403: OpenApiResponse(description="Admins only."),
            404: OpenApiResponse(description="User not found."),
        },
        tags=["Accounts"],
    )
    @action(detail=True, methods=["put"], url_path="role")
    def change_role(self, request: Request, pk: str = None) -> Response:
        """PUT /api/users/{id}/role/"""
        serializer = ChangeRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserManagementService.change_role(
            user_id=pk,
            role=serializer.validated_data["role"],
            performed_by=request.user,
        )
        return Response(
            {"message": "Role updated successfully", "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
