from django.urls import path

from apps.accounts.views import LoginAPIView
from apps.accounts.views import LogoutAPIView
from apps.accounts.views import ProfileAPIView
from apps.accounts.views import RefreshAPIView
from apps.accounts.views import RegisterAPIView

app_name = 'accounts'

urlpatterns = [
    path('register/', RegisterAPIView.as_view(), name='register'),  # POST
    path('login/', LoginAPIView.as_view(), name='login'),  # POST
    path('refresh/', RefreshAPIView.as_view(), name='refresh'),  # POST
    path('logout/', LogoutAPIView.as_view(), name='logout'),  # POST
    path('profile/', ProfileAPIView.as_view(), name='profile'),  # GET
]
