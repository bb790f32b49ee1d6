from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import (
    CustomTokenObtainPairView,
    LogoutView,
    RegisterStaffView,
    StaffListView,
    StaffDetailView,
    UserProfileView,
    ProfilePictureView,
    ChangePasswordView,
    PasswordResetRequestView,
    PasswordResetConfirmView,
)

urlpatterns = [
    # Authentication endpoints
    path('login/', CustomTokenObtainPairView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('password-reset/', PasswordResetRequestView.as_view(), name='password_reset'),
    path('password-reset/confirm/', PasswordResetConfirmView.as_view(), name='password_reset_confirm'),

    # Staff management endpoints (admin roles)
    path('staff/register/', RegisterStaffView.as_view(), name='register_staff'),
    path('staff/', StaffListView.as_view(), name='staff_list'),
    path('staff/<int:user_id>/', StaffDetailView.as_view(), name='staff_detail'),

    # User endpoints (authenticated users)
    path('profile/', UserProfileView.as_view(), name='user_profile'),
    path('profile/picture/', ProfilePictureView.as_view(), name='profile_picture'),
    path('change-password/', ChangePasswordView.as_view(), name='change_password'),
]
