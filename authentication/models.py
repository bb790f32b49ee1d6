from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager


class CustomUserManager(BaseUserManager):
    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError("The Username field must be set")
        user = self.model(username=username, **extra_fields)
        user.set_password(password)  # Hash the password
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields['role'] = CustomUser.MASTER_ADMIN
        extra_fields.setdefault('work_area', CustomUser.FRONT_OFFICE_AREA)

        if extra_fields.get('is_staff') is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get('is_superuser') is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self.create_user(username, password, **extra_fields)


def profile_picture_path(instance, filename):
    return f"profile_pictures/{instance.pk}/{filename}"


class CustomUser(AbstractUser):
    MASTER_ADMIN = 'Master Admin'
    FRONT_OFFICE_AREA = 'Front Office'

    ROLE_CHOICES = [
        ('Sewer', 'Sewer'),
        ('Lead Welder', 'Lead Welder'),
        ('Welder', 'Welder'),
        ("Welder's Helper", "Welder's Helper"),
        ('Lead Installer', 'Lead Installer'),
        ("Installer's Helper", "Installer's Helper"),
        ('Installer', 'Installer'),
        ('Front Office', 'Front Office'),
        (MASTER_ADMIN, 'Master Admin'),
    ]
    # Roles allowed to manage staff accounts
    ADMIN_ROLES = ('Front Office', 'Lead Welder', 'Lead Installer', MASTER_ADMIN)

    WORK_AREA_CHOICES = [
        ('Sewing', 'Sewing'),
        ('Welding', 'Welding'),
        ('Installation', 'Installation'),
        (FRONT_OFFICE_AREA, 'Front Office'),
    ]

    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='Installer')
    work_area = models.CharField(max_length=20, choices=WORK_AREA_CHOICES, default='Installation')
    phone = models.CharField(max_length=30, blank=True, null=True)
    profile_picture = models.FileField(upload_to=profile_picture_path, blank=True, null=True)
    objects = CustomUserManager()

    @property
    def is_shop_admin(self):
        return self.role in self.ADMIN_ROLES

    def __str__(self):
        return self.get_full_name() or self.username
