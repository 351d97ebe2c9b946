"""
Tests for membership products, redemption codes and expiry.
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from hypothesis import given, strategies as st, settings

from apps.authentication.models import Role, User
from apps.membership.models import MembershipProduct, RedemptionCode
from apps.membership.services import CODE_ALPHABET, CODE_LENGTH, extend_expiry, generate_code
from apps.membership.tasks import expire_memberships

NOW = timezone.now()


class TestCodeGeneration:
    """generate_code"""

    @given(st.integers(min_value=1, max_value=64))
    @settings(max_examples=100)
    def test_length_and_alphabet(self, length):
        code = generate_code(length)

        assert len(code) == length
        assert set(code) <= set(CODE_ALPHABET)

    def test_default_length(self):
        assert len(generate_code()) == CODE_LENGTH


class TestExtendExpiry:
    """extend_expiry"""

    @given(st.integers(min_value=1, max_value=3650), st.integers(min_value=1, max_value=1000))
    @settings(max_examples=100)
    def test_active_membership_is_extended_from_expiry(self, days, remaining):
        current = NOW + timedelta(days=remaining)

        assert extend_expiry(current, days, NOW) == current + timedelta(days=days)

    @given(st.integers(min_value=1, max_value=3650), st.integers(min_value=0, max_value=1000))
    @settings(max_examples=100)
    def test_lapsed_membership_restarts_from_now(self, days, overdue):
        current = NOW - timedelta(days=overdue)

        assert extend_expiry(current, days, NOW) == NOW + timedelta(days=days)

    def test_no_previous_expiry(self):
        assert extend_expiry(None, 30, NOW) == NOW + timedelta(days=30)


@pytest.mark.django_db
class TestRedeem:
    """POST /api/membership/redeem"""

    def test_normal_user_becomes_premium(self, client_for, normal_user):
        RedemptionCode.objects.create(code='ABCDEFGH12345678', duration_days=30)

        response = client_for(normal_user).post('/api/membership/redeem', {'code': 'abcdefgh12345678'})

        assert response.status_code == 200
        assert response.json()['message'] == '兑换成功'
        normal_user.refresh_from_db()
        assert normal_user.role == Role.PREMIUM
        assert normal_user.premium_expiry_date > timezone.now() + timedelta(days=29)
        code = RedemptionCode.objects.get()
        assert code.is_used is True
        assert code.used_by_user_id == normal_user.id

    def test_extends_active_premium(self, client_for, make_user):
        expiry = timezone.now() + timedelta(days=10)
        user = make_user(Role.PREMIUM, premium_expiry_date=expiry)
        RedemptionCode.objects.create(code='CODE000000000001', duration_days=30)

        client_for(user).post('/api/membership/redeem', {'code': 'CODE000000000001'})

        user.refresh_from_db()
        assert user.premium_expiry_date == expiry + timedelta(days=30)

    def test_lifetime_role_is_kept(self, client_for, make_user):
        user = make_user(Role.LIFETIME)
        RedemptionCode.objects.create(code='CODE000000000002', duration_days=30)

        client_for(user).post('/api/membership/redeem', {'code': 'CODE000000000002'})

        user.refresh_from_db()
        assert user.role == Role.LIFETIME

    def test_unknown_code(self, client_for, normal_user):
        response = client_for(normal_user).post('/api/membership/redeem', {'code': 'NOPE'})

        assert response.status_code == 400
        assert response.json()['error']['message'] == '兑换码不存在'

    def test_code_cannot_be_reused(self, client_for, normal_user, make_user):
        RedemptionCode.objects.create(code='CODE000000000003', duration_days=7)
        client_for(normal_user).post('/api/membership/redeem', {'code': 'CODE000000000003'})

        response = client_for(make_user()).post('/api/membership/redeem', {'code': 'CODE000000000003'})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'CODE_USED'

    def test_requires_login(self, api_client, db):
        assert api_client.post('/api/membership/redeem', {'code': 'X'}).status_code == 401


@pytest.mark.django_db
class TestProducts:
    """Products, public and admin"""

    def test_public_list_shows_active_by_price(self, api_client):
        MembershipProduct.objects.create(title='年卡', price='199.00', duration_days=365, type='PREMIUM_ANNUAL')
        MembershipProduct.objects.create(title='月卡', price='19.90', duration_days=30, type='PREMIUM_MONTHLY')
        MembershipProduct.objects.create(title='下架', price='9.90', duration_days=7, type='PREMIUM_MONTHLY', is_active=False)

        body = api_client.get('/api/membership/products').json()

        assert [item['title'] for item in body] == ['月卡', '年卡']
        assert body[0]['price'] == '19.90'

    def test_admin_crud(self, admin_client):
        created = admin_client.post('/api/admin/membership/products', {
            'title': '终身卡',
            'price': '999.00',
            'durationDays': 36500,
            'type': 'LIFETIME',
        })
        assert created.status_code == 201
        product_id = created.json()['id']

        patched = admin_client.patch(f'/api/admin/membership/products/{product_id}', {'isActive': False})
        assert patched.json()['isActive'] is False

        put = admin_client.put(f'/api/admin/membership/products/{product_id}', {'title': 'x'})
        assert put.status_code == 400

        assert admin_client.delete(f'/api/admin/membership/products/{product_id}').status_code == 200
        assert admin_client.get(f'/api/admin/membership/products/{product_id}').status_code == 404


@pytest.mark.django_db
class TestRedemptionCodes:
    """/api/admin/membership/redemption-codes"""

    def test_create_batch(self, admin_client):
        response = admin_client.post('/api/admin/membership/redemption-codes', {'durationDays': 30, 'count': 5})

        assert response.status_code == 201
        codes = [item['code'] for item in response.json()]
        assert len(set(codes)) == 5
        assert all(len(code) == CODE_LENGTH for code in codes)

    def test_list_filters_used(self, admin_client, normal_user):
        RedemptionCode.objects.create(code='USED000000000001', duration_days=30, is_used=True, used_by_user=normal_user)
        RedemptionCode.objects.create(code='FREE000000000001', duration_days=30)

        used = admin_client.get('/api/admin/membership/redemption-codes', {'isUsed': 'true'}).json()
        everything = admin_client.get('/api/admin/membership/redemption-codes').json()

        assert [item['code'] for item in used['data']] == ['USED000000000001']
        assert used['data'][0]['usedByUser']['id'] == normal_user.id
        assert everything['meta']['total'] == 2
        assert everything['meta']['limit'] == 10

    def test_members_list(self, admin_client, premium_user, normal_user, make_user):
        lifetime = make_user(Role.LIFETIME)

        body = admin_client.get('/api/admin/membership/members').json()
        lifetime_only = admin_client.get('/api/admin/membership/members', {'role': 'LIFETIME'}).json()

        assert {item['id'] for item in body['data']} == {premium_user.id, lifetime.id}
        assert [item['id'] for item in lifetime_only['data']] == [lifetime.id]


@pytest.mark.django_db
class TestExpireMemberships:
    """Hourly expiry task"""

    def test_expired_premium_drops_to_normal(self, make_user):
        expired = make_user(Role.PREMIUM, premium_expiry_date=timezone.now() - timedelta(hours=1))
        active = make_user(Role.PREMIUM, premium_expiry_date=timezone.now() + timedelta(days=1))
        lifetime = make_user(Role.LIFETIME, premium_expiry_date=timezone.now() - timedelta(days=1))

        result = expire_memberships()

        assert result == 'Expired 1 memberships'
        assert User.objects.get(id=expired.id).role == Role.NORMAL
        assert User.objects.get(id=expired.id).premium_expiry_date is None
        assert User.objects.get(id=active.id).role == Role.PREMIUM
        assert User.objects.get(id=lifetime.id).role == Role.LIFETIME
