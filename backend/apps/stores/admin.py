# apps/stores/admin.py

from django.contrib import admin

from .models import Store, VendorUpgradeRequest, CashoutRequest


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(VendorUpgradeRequest)
class VendorUpgradeRequestAdmin(admin.ModelAdmin):
    list_display = ['user', 'bank_name', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['user__email', 'account_name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(CashoutRequest)
class CashoutRequestAdmin(admin.ModelAdmin):
    list_display = ['vendor', 'amount', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['vendor__email']
    readonly_fields = ['created_at', 'updated_at']
