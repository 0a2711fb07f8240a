# apps/auth/permissions.py

from rest_framework import permissions


class IsPlatformAdmin(permissions.BasePermission):
    """
    Permission for marketplace administrators
    """
    message = 'Admin access required'
    
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_platform_admin)


class IsVendor(permissions.BasePermission):
    """
    Permission for users allowed to own stores (vendors and admins)
    """
    message = 'Access denied. Vendor account required.'
    
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_vendor)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission: the object's owner or a platform admin.
    
    Views set `owner_field` to a dotted path from the object to its owning user,
    e.g. 'owner' for stores or 'store.owner' for products.
    """
    message = 'You do not have access to this resource'
    
    def has_object_permission(self, request, view, obj):
        if request.user.is_platform_admin:
            return True
        
        owner = obj
        for attr in getattr(view, 'owner_field', 'owner').split('.'):
            owner = getattr(owner, attr, None)
        return owner == request.user

