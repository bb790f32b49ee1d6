from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework import serializers
from .models import CustomUser


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)

        # Add custom claims
        token['username'] = user.username
        token['role'] = user.role
        token['work_area'] = user.work_area

        return token

    def validate(self, attrs):
        data = super().validate(attrs)

        data['user_id'] = self.user.id
        data['username'] = self.user.username
        data['role'] = self.user.role
        data['work_area'] = self.user.work_area
        data['is_admin'] = self.user.is_shop_admin

        return data


class RegisterUserSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, min_length=8)
    email = serializers.EmailField(required=False, allow_blank=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES, required=False, default='Installer')
    work_area = serializers.ChoiceField(choices=CustomUser.WORK_AREA_CHOICES, required=False, default='Installation')
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)

    def validate_username(self, value):
        if CustomUser.objects.filter(username=value).exists():
            raise serializers.ValidationError("Username already exists.")
        return value

    def validate_email(self, value):
        if value and CustomUser.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already exists.")
        return value

    def validate_role(self, value):
        # Only a master admin may hand out the master admin role
        request = self.context.get('request')
        if value == CustomUser.MASTER_ADMIN and (request is None or request.user.role != CustomUser.MASTER_ADMIN):
            raise serializers.ValidationError("Only a Master Admin can create another Master Admin.")
        return value

    def create(self, validated_data):
        return CustomUser.objects.create_user(
            username=validated_data["username"],
            password=validated_data["password"],
            email=validated_data.get("email", ""),
            first_name=validated_data.get("first_name", ""),
            last_name=validated_data.get("last_name", ""),
            role=validated_data["role"],
            work_area=validated_data["work_area"],
            phone=validated_data.get("phone") or None,
        )


class UserDetailSerializer(serializers.ModelSerializer):
    is_admin = serializers.BooleanField(source='is_shop_admin', read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name', 'role', 'work_area', 'phone',
            'profile_picture', 'is_admin', 'is_active', 'date_joined', 'last_login',
        ]
        read_only_fields = ['id', 'profile_picture', 'date_joined', 'last_login']


class ProfileSerializer(UserDetailSerializer):
    """A user's own profile: role, work area and account state are managed by admins."""

    class Meta(UserDetailSerializer.Meta):
        read_only_fields = [
            'id', 'username', 'role', 'work_area', 'profile_picture', 'is_active', 'date_joined', 'last_login',
        ]


class ProfilePictureSerializer(serializers.ModelSerializer):
    profile_picture = serializers.FileField(required=True)

    class Meta:
        model = CustomUser
        fields = ['profile_picture']


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(required=True)
    new_password = serializers.CharField(required=True, min_length=8)

    def validate_old_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError("Old password is incorrect.")
        return value


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetConfirmSerializer(serializers.Serializer):
    uid = serializers.CharField()
    token = serializers.CharField()
    new_password = serializers.CharField(min_length=8)

    def validate_new_password(self, value):
        validate_password(value)
        return value
