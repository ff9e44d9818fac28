"""Permissions shared by the booking verticals."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsReservationStakeholder(permissions.BasePermission):
    """The guest, the provider owning the inventory and admins can see a reservation."""

    def has_object_permission(self, request, view, obj):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return obj.guest_id == user.id or obj.is_managed_by(user)


class IsInventoryOwnerOrAdmin(permissions.BasePermission):
    """Anyone may browse inventory; providers of the view's vertical manage their own.

    The view declares ``vertical`` (``"hotels"``, ``"cars"``...) and may set
    ``owner_path`` when ownership is reached through a relation
    (``"property.owner_id"`` for rooms).
    """

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        return user.can_manage(view.vertical)

    def has_object_permission(self, request, view, obj):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if user.is_admin():
            return True
        owner_id = obj
        for part in getattr(view, "owner_path", "owner_id").split("."):
            owner_id = getattr(owner_id, part)
        return owner_id == user.id
