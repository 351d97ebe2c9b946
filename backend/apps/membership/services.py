"""
Membership service: products, redemption codes and member listing.
"""

import logging
import secrets
import string
from datetime import timedelta

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.authentication.models import Role, User
from apps.core.exceptions import NotFoundError, ValidationError
from .models import MembershipProduct, RedemptionCode

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 16
MEMBER_ROLES = (Role.PREMIUM, Role.LIFETIME)


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random code from A-Z0-9"""
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def extend_expiry(current_expiry, duration_days: int, now=None):
    """Add duration_days to whichever is later: now or the current expiry"""
    now = now or timezone.now()
    base = current_expiry if current_expiry and current_expiry > now else now
    return base + timedelta(days=duration_days)


class MembershipService:

    # Products

    def list_products(self, active_only: bool = False):
        queryset = MembershipProduct.objects.all()
        if active_only:
            queryset = queryset.filter(is_active=True).order_by('price')
        return queryset

    def get_product(self, product_id: int) -> MembershipProduct:
        try:
            return MembershipProduct.objects.get(id=product_id)
        except MembershipProduct.DoesNotExist:
            raise NotFoundError('会员产品不存在')

    def create_product(self, data: dict) -> MembershipProduct:
        return MembershipProduct.objects.create(
            title=data['title'],
            description=data.get('description') or '',
            price=data['price'],
            duration_days=data['durationDays'],
            type=data['type'],
            is_active=data.get('isActive', True),
        )

    def update_product(self, product_id: int, data: dict) -> MembershipProduct:
        product = self.get_product(product_id)
        for field, key in (('title', 'title'), ('description', 'description'), ('price', 'price'),
                           ('duration_days', 'durationDays'), ('type', 'type'), ('is_active', 'isActive')):
            if key in data:
                setattr(product, field, data[key])
        product.save()
        return product

    def delete_product(self, product_id: int) -> None:
        self.get_product(product_id).delete()

    # Redemption codes

    def _unique_code(self) -> str:
        while True:
            code = generate_code()
            if not RedemptionCode.objects.filter(code=code).exists():
                return code

    @transaction.atomic
    def create_codes(self, duration_days: int, count: int = 1) -> list:
        codes = [
            RedemptionCode.objects.create(code=self._unique_code(), duration_days=duration_days)
            for _ in range(count)
        ]
        logger.info(f'Created {len(codes)} redemption codes for {duration_days} days')
        return codes

    def list_codes(self, filters: dict):
        queryset = RedemptionCode.objects.select_related('used_by_user')
        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(code__icontains=search)
        if filters.get('isUsed') is not None:
            queryset = queryset.filter(is_used=filters['isUsed'])
        return queryset.order_by('-created_at')

    def redeem(self, user, code: str) -> dict:
        """
        Apply a code to the user's membership

        Raises:
            ValidationError: unknown or already used code
        """
        code = (code or '').strip().upper()
        with transaction.atomic():
            record = RedemptionCode.objects.select_for_update().filter(code=code).first()
            if record is None:
                raise ValidationError('兑换码不存在', code='INVALID_CODE')
            if record.is_used:
                raise ValidationError('兑换码已被使用', code='CODE_USED')

            account = User.objects.select_for_update().get(id=user.id)
            now = timezone.now()
            account.premium_expiry_date = extend_expiry(account.premium_expiry_date, record.duration_days, now)
            if account.role not in (Role.LIFETIME, Role.ADMIN):
                account.role = Role.PREMIUM
            account.save(update_fields=['premium_expiry_date', 'role', 'updated_at'])

            record.is_used = True
            record.used_by_user = account
            record.used_at = now
            record.save(update_fields=['is_used', 'used_by_user', 'used_at'])

        logger.info(f'User {account.id} redeemed code {record.id} (+{record.duration_days} days)')
        return {
            'success': True,
            'message': '兑换成功',
            'expiryDate': account.premium_expiry_date,
        }

    # Members

    def list_members(self, filters: dict):
        queryset = User.objects.filter(role__in=MEMBER_ROLES)
        if filters.get('role') in MEMBER_ROLES:
            queryset = queryset.filter(role=filters['role'])
        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(username__icontains=search) | Q(nickname__icontains=search) | Q(email__icontains=search)
            )
        return queryset.order_by('-created_at')

    def expire_premium_members(self) -> int:
        """Drop PREMIUM users past their expiry back to NORMAL"""
        return User.objects.filter(
            role=Role.PREMIUM,
            premium_expiry_date__lt=timezone.now(),
        ).update(role=Role.NORMAL, premium_expiry_date=None, updated_at=timezone.now())


# Create singleton instance
membership_service = MembershipService()
