"""
Membership products and redemption codes.

Tables: membership_products, redemption_codes
"""

from django.db import models

from apps.authentication.models import User


class MembershipType(models.TextChoices):
    PREMIUM_MONTHLY = 'PREMIUM_MONTHLY', '月度会员'
    PREMIUM_QUARTERLY = 'PREMIUM_QUARTERLY', '季度会员'
    PREMIUM_ANNUAL = 'PREMIUM_ANNUAL', '年度会员'
    LIFETIME = 'LIFETIME', '终身会员'


class MembershipProduct(models.Model):
    title = models.CharField(max_length=100)
    description = models.TextField(blank=True, default='')
    price = models.DecimalField(max_digits=10, decimal_places=2)
    duration_days = models.PositiveIntegerField()
    type = models.CharField(max_length=20, choices=MembershipType.choices)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'membership_products'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class RedemptionCode(models.Model):
    """
    Single-use code granting duration_days of premium membership
    """
    code = models.CharField(max_length=32, unique=True)
    duration_days = models.PositiveIntegerField()
    is_used = models.BooleanField(default=False)
    used_by_user = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='redeemed_codes'
    )
    used_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'redemption_codes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_used'], name='redemption_used_idx'),
        ]

    def __str__(self):
        return self.code
