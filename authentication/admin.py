from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'first_name', 'last_name', 'role', 'work_area', 'is_active')
    list_filter = ('role', 'work_area', 'is_active')
    fieldsets = UserAdmin.fieldsets + (
        ('Shop', {'fields': ('role', 'work_area', 'phone', 'profile_picture')}),
    )
