import logging

from django.conf import settings
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework.permissions import IsAuthenticated, AllowAny
from .models import CustomUser
from .permissions import IsShopAdmin
from .serializers import (
    CustomTokenObtainPairSerializer,
    RegisterUserSerializer,
    UserDetailSerializer,
    ProfileSerializer,
    ProfilePictureSerializer,
    ChangePasswordSerializer,
    PasswordResetRequestSerializer,
    PasswordResetConfirmSerializer,
)

logger = logging.getLogger('authentication')


# Login View - any active user
class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        username = request.data.get('username')
        user = CustomUser.objects.filter(username=username).first()
        if user and not user.is_active and user.check_password(request.data.get('password') or ''):
            return Response(
                {"error": "This account has been deactivated. Please contact your administrator."},
                status=status.HTTP_403_FORBIDDEN
            )

        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except AuthenticationFailed:
            logger.warning(f"Failed login for '{username}'")
            return Response(
                {"error": "Invalid username or password"},
                status=status.HTTP_401_UNAUTHORIZED
            )

        response_data = serializer.validated_data
        response_data['message'] = f"Welcome {serializer.user.get_full_name() or serializer.user.username}!"
        return Response(response_data, status=status.HTTP_200_OK)


# Logout View - blacklists the refresh token
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get("refresh")
        if not refresh_token:
            return Response(
                {"error": "Refresh token is required"},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError:
            # Already blacklisted or expired
            pass

        return Response({"message": "Logout successful"}, status=status.HTTP_200_OK)


# Register Staff View - admin roles only
class RegisterStaffView(APIView):
    permission_classes = [IsShopAdmin]

    def post(self, request):
        serializer = RegisterUserSerializer(data=request.data, context={'request': request})
        if serializer.is_valid():
            user = serializer.save()
            logger.info(f"User {user.username} created by {request.user.username}")
            return Response(
                {
                    "message": f"Staff member '{user.username}' created successfully!",
                    "user": UserDetailSerializer(user).data,
                },
                status=status.HTTP_201_CREATED,
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class StaffListView(APIView):
    """Everyone can see the crew list; ?q= searches name, email, role and work area."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        staff_members = CustomUser.objects.order_by('first_name', 'last_name', 'username')
        query = request.query_params.get('q', '').strip().lower()
        if query:
            staff_members = [
                user for user in staff_members
                if any(
                    query in (value or '').lower()
                    for value in (user.get_full_name(), user.username, user.email, user.role, user.work_area)
                )
            ]
        serializer = UserDetailSerializer(staff_members, many=True)

        return Response({
            "count": len(serializer.data),
            "results": serializer.data
        }, status=status.HTTP_200_OK)


# Get, Update, Deactivate a staff member - admin roles only
class StaffDetailView(APIView):
    permission_classes = [IsShopAdmin]

    def get_user(self, user_id):
        return CustomUser.objects.filter(id=user_id).first()

    def get(self, request, user_id):
        user = self.get_user(user_id)
        if user is None:
            return Response({"error": "User not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    def patch(self, request, user_id):
        user = self.get_user(user_id)
        if user is None:
            return Response({"error": "User not found"}, status=status.HTTP_404_NOT_FOUND)

        data = request.data.copy()
        # Admins cannot change their own role
        if user.id == request.user.id:
            data.pop('role', None)
        if data.get('role') == CustomUser.MASTER_ADMIN and request.user.role != CustomUser.MASTER_ADMIN:
            return Response(
                {"error": "Only a Master Admin can grant the Master Admin role"},
                status=status.HTTP_403_FORBIDDEN
            )

        serializer = UserDetailSerializer(user, data=data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(
                {
                    "message": "User updated successfully",
                    "user": serializer.data
                },
                status=status.HTTP_200_OK
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def delete(self, request, user_id):
        user = self.get_user(user_id)
        if user is None:
            return Response({"error": "User not found"}, status=status.HTTP_404_NOT_FOUND)

        if user.id == request.user.id:
            return Response(
                {"error": "You cannot delete your own account"},
                status=status.HTTP_400_BAD_REQUEST
            )

        # Deactivate only; time entries and activity keep their user
        user.is_active = False
        user.save(update_fields=['is_active'])
        logger.info(f"User {user.username} deactivated by {request.user.username}")

        return Response(
            {"message": f"User '{user.username}' has been deactivated"},
            status=status.HTTP_200_OK
        )


# User Profile View - the signed-in user's own profile
class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = ProfileSerializer(request.user)
        return Response(serializer.data, status=status.HTTP_200_OK)

    def patch(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ProfilePictureView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = ProfilePictureSerializer(request.user, data=request.data)
        if serializer.is_valid():
            if request.user.profile_picture:
                request.user.profile_picture.delete(save=False)
            serializer.save()
            return Response(ProfileSerializer(request.user).data, status=status.HTTP_200_OK)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        if serializer.is_valid():
            user = request.user
            user.set_password(serializer.validated_data['new_password'])
            user.save()

            return Response(
                {"message": "Password changed successfully. Please login with your new password."},
                status=status.HTTP_200_OK
            )
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class PasswordResetRequestView(APIView):
    """Always answers 200 so the endpoint cannot be used to probe for accounts."""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        for user in CustomUser.objects.filter(email__iexact=serializer.validated_data['email'], is_active=True):
            link = settings.PASSWORD_RESET_URL.format(
                uid=urlsafe_base64_encode(force_bytes(user.pk)),
                token=default_token_generator.make_token(user),
            )
            send_mail(
                subject="Reset your password",
                message=f"Hi {user.get_full_name() or user.username},\n\nReset your password here: {link}\n",
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[user.email],
            )
            logger.info(f"Password reset link sent to user {user.pk}")

        return Response(
            {"message": "If an account exists for that email, a reset link has been sent."},
            status=status.HTTP_200_OK
        )


class PasswordResetConfirmView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user_id = force_str(urlsafe_base64_decode(serializer.validated_data['uid']))
            user = CustomUser.objects.get(pk=user_id)
        except (TypeError, ValueError, OverflowError, CustomUser.DoesNotExist):
            user = None

        if user is None or not default_token_generator.check_token(user, serializer.validated_data['token']):
            return Response({"error": "This reset link is invalid or has expired"}, status=status.HTTP_400_BAD_REQUEST)

        user.set_password(serializer.validated_data['new_password'])
        user.save()
        return Response({"message": "Password has been reset. Please login."}, status=status.HTTP_200_OK)
