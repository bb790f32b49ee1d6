from rest_framework.permissions import IsAuthenticated


class IsShopAdmin(IsAuthenticated):
    """Front office, lead welders, lead installers and master admins."""

    def has_permission(self, request, view):
        return super().has_permission(request, view) and request.user.is_shop_admin
