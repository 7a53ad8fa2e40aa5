from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication


class BaseAPIView(APIView):
    """
    Base class for all API views.

    JWT authentication only. Business exceptions raised by services are
    rendered by the global DRF exception handler, views never catch them.
    """

    authentication_classes = (JWTAuthentication,)
