"""
Store services: vendor stores, vendor upgrade requests and cashouts
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.core.services import BaseService, ValidationError, NotFoundError, PermissionError
from apps.core.utils import normalize_phone
from .models import Store, VendorUpgradeRequest, CashoutRequest

User = get_user_model()


class StoreService(BaseService):
    """Service for creating and managing vendor stores"""

    def _check_name_available(self, name: str, exclude_pk=None):
        queryset = Store.objects.by_name(name)
        if exclude_pk:
            queryset = queryset.exclude(pk=exclude_pk)
        if queryset.exists():
            raise ValidationError("A store with this name already exists", details={'name': name})

    def create_store(self, name: str, description: str = '', logo=None, banner=None) -> Store:
        """Create a store owned by the current user"""
        if not self.user or not self.user.is_vendor:
            raise PermissionError("Access denied. Vendor account required.")

        name = self.sanitize_string(name, 150)
        if not name:
            raise ValidationError("Store name is required")
        self._check_name_available(name)

        store = Store.objects.create(
            owner=self.user,
            name=name,
            description=self.sanitize_string(description),
            logo=logo,
            banner=banner,
        )
        self.log_info(f"Store '{store.name}' created", {'store_id': store.pk})
        return store

    def update_store(self, store: Store, **fields) -> Store:
        if 'name' in fields:
            name = self.sanitize_string(fields['name'], 150)
            if not name:
                raise ValidationError("Store name is required")
            self._check_name_available(name, exclude_pk=store.pk)
            fields['name'] = name

        for field, value in fields.items():
            setattr(store, field, value)
        store.save()

        self.log_info(f"Store '{store.name}' updated", {'store_id': store.pk, 'fields': list(fields)})
        return store

    def get_store_by_name(self, name: str) -> Store:
        """Case-insensitive lookup of an active store"""
        store = Store.objects.active().by_name(name).first()
        if store is None:
            raise NotFoundError("Store not found", details={'name': name})
        return store

    def list_my_stores(self):
        return Store.objects.filter(owner=self.user).order_by('-created_at')

    def set_active(self, store: Store, is_active: bool) -> Store:
        """Admin action: show or hide a store"""
        store.is_active = is_active
        store.save(update_fields=['is_active', 'updated_at'])
        self.create_audit_log('set_store_active', 'store', store.pk, {'is_active': is_active})
        return store


class VendorUpgradeService(BaseService):
    """Service for customer requests to become vendors"""

    REQUIRED_FIELDS = ['phone', 'bvn', 'account_number', 'account_name', 'bank_name']

    def submit_request(self, phone: str, bvn: str, account_number: str,
                       account_name: str, bank_name: str) -> VendorUpgradeRequest:
        data = {
            'phone': phone,
            'bvn': bvn,
            'account_number': account_number,
            'account_name': account_name,
            'bank_name': bank_name,
        }

        if self.user.is_vendor:
            raise ValidationError("You already have vendor access")
        if VendorUpgradeRequest.objects.filter(
            user=self.user, status=VendorUpgradeRequest.Status.PENDING
        ).exists():
            raise ValidationError("You already have a pending vendor upgrade request")

        self.validate_required_fields(data, self.REQUIRED_FIELDS, "Please fill in all fields")
        data = {key: self.sanitize_string(value) for key, value in data.items()}

        normalized_phone = normalize_phone(data['phone'])
        if normalized_phone is None:
            raise ValidationError("Invalid phone number", details={'phone': data['phone']})
        data['phone'] = normalized_phone

        if not (data['bvn'].isascii() and data['bvn'].isdigit() and len(data['bvn']) == 11):
            raise ValidationError("BVN must be 11 digits")
        account_number = data['account_number']
        if not (account_number.isascii() and account_number.isdigit() and len(account_number) == 10):
            raise ValidationError("Account number must be 10 digits")

        request = VendorUpgradeRequest.objects.create(user=self.user, **data)
        self.log_info("Vendor upgrade request submitted", {'request_id': request.pk})
        return request

    def latest_request(self) -> Optional[VendorUpgradeRequest]:
        return self.user.vendor_upgrade_requests.order_by('-created_at').first()

    def list_requests(self, status: Optional[str] = None):
        queryset = VendorUpgradeRequest.objects.select_related('user').order_by('-created_at')
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    @transaction.atomic
    def review_request(self, request_id, approve: bool) -> VendorUpgradeRequest:
        """Admin action: approve or reject a pending upgrade request"""
        request = VendorUpgradeRequest.objects.select_for_update().filter(pk=request_id).first()
        if request is None:
            raise NotFoundError("Vendor upgrade request not found")
        if request.status != VendorUpgradeRequest.Status.PENDING:
            raise ValidationError("Only pending requests can be reviewed")

        if approve:
            applicant = User.objects.select_for_update().get(pk=request.user_id)
            if not applicant.is_platform_admin:
                applicant.role = User.ROLE_VENDOR
            applicant.phone = request.phone
            applicant.bvn = request.bvn
            applicant.account_number = request.account_number
            applicant.account_name = request.account_name
            applicant.bank_name = request.bank_name
            applicant.save(update_fields=[
                'role', 'phone', 'bvn', 'account_number', 'account_name', 'bank_name', 'updated_at'
            ])
            request.status = VendorUpgradeRequest.Status.APPROVED
            request.admin_notes = "Approved by admin"
        else:
            request.status = VendorUpgradeRequest.Status.REJECTED
            request.admin_notes = "Rejected by admin"

        request.save(update_fields=['status', 'admin_notes', 'updated_at'])
        self.create_audit_log('review_upgrade_request', 'vendor_upgrade_request', request.pk, {
            'status': request.status
        })
        return request


class CashoutService(BaseService):
    """Service for vendor cashout requests"""

    def _parse_amount(self, amount) -> Decimal:
        try:
            return Decimal(str(amount)).quantize(Decimal('0.01'))
        except (InvalidOperation, TypeError, ValueError):
            raise ValidationError("Invalid amount")

    def request_cashout(self, amount) -> CashoutRequest:
        if not self.user.is_vendor:
            raise PermissionError("Access denied. Vendor account required.")

        amount = self._parse_amount(amount)
        if amount <= 0 or amount > self.user.available_balance:
            raise ValidationError("Invalid amount", details={
                'available_balance': str(self.user.available_balance)
            })

        cashout = CashoutRequest.objects.create(vendor=self.user, amount=amount)
        self.log_info(f"Cashout of {amount} requested", {'cashout_id': cashout.pk})
        return cashout

    def list_requests(self, status: Optional[str] = None):
        queryset = CashoutRequest.objects.select_related('vendor').order_by('-created_at')
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    def review_cashout(self, cashout_id, approve: bool) -> CashoutRequest:
        """
        Admin action: pay out or reject a pending cashout.

        Approval re-reads the vendor balance under a row lock. When it no longer
        covers the amount the request is left pending and an error is raised.
        """
        with transaction.atomic():
            cashout = CashoutRequest.objects.select_for_update().filter(pk=cashout_id).first()
            if cashout is None:
                raise NotFoundError("Cashout request not found")
            if cashout.status != CashoutRequest.Status.PENDING:
                raise ValidationError("Only pending requests can be reviewed")

            if approve:
                vendor = User.objects.select_for_update().get(pk=cashout.vendor_id)
                if vendor.available_balance < cashout.amount:
                    raise ValidationError("Insufficient balance", details={
                        'available_balance': str(vendor.available_balance),
                        'amount': str(cashout.amount),
                    })
                vendor.available_balance -= cashout.amount
                vendor.save(update_fields=['available_balance', 'updated_at'])
                cashout.status = CashoutRequest.Status.COMPLETED
                cashout.admin_notes = "Processed by admin"
            else:
                cashout.status = CashoutRequest.Status.REJECTED
                cashout.admin_notes = "Rejected by admin"

            cashout.save(update_fields=['status', 'admin_notes', 'updated_at'])

        self.create_audit_log('review_cashout', 'cashout_request', cashout.pk, {
            'status': cashout.status,
            'amount': str(cashout.amount),
        })
        return cashout
