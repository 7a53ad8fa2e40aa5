import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenBlacklistView
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView

from apps.accounts.serializers import UserProfileSerializer
from apps.accounts.serializers import UserRegistrationSerializer
from apps.shared.base.base_api_view import BaseAPIView
from apps.shared.container import get_user_service

logger = logging.getLogger(__name__)


@extend_schema(tags=['Accounts'])
class RegisterAPIView(BaseAPIView):
    """Create an account, or claim the one created when a ticket was issued"""

    permission_classes = [AllowAny]
    serializer_class = UserRegistrationSerializer

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, claimed = get_user_service().register_user(**serializer.validated_data)

        refresh = RefreshToken.for_user(user)
        response_data = {
            'user': UserProfileSerializer(user).data,
            'claimed_existing_account': claimed,
            'tokens': {'access': str(refresh.access_token), 'refresh': str(refresh)},
        }
        return Response(response_data, status=status.HTTP_201_CREATED)


@extend_schema(tags=['Accounts'])
class LoginAPIView(TokenObtainPairView):
    """Obtain a JWT pair with email + password"""


@extend_schema(tags=['Accounts'])
class RefreshAPIView(TokenRefreshView):
    """Rotate the refresh token"""


@extend_schema(tags=['Accounts'])
class LogoutAPIView(TokenBlacklistView):
    """Blacklist the refresh token"""


@extend_schema(tags=['Accounts'])
class ProfileAPIView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserProfileSerializer(request.user).data, status=status.HTTP_200_OK)
