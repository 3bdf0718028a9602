"""Tests for login, token refresh and role checks."""

import pytest
from rest_framework.exceptions import PermissionDenied
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from authentication.permissions import FRONT_OF_HOUSE, authorize

LOGIN_URL = '/api/users/login/'


@pytest.mark.django_db
class TestLogin:
    """Test suite for POST /api/users/login/."""

    def test_login_returns_tokens_with_role_and_location(self, api_client, make_user, location):
        user = make_user('manager')

        response = api_client.post(LOGIN_URL, {'email': 'manager@thrive.lk', 'password': 'Secret123!'}, format='json')

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['data']['user']['id'] == str(user.pk)
        assert 'password' not in body['data']['user']

        claims = AccessToken(body['data']['token'])
        assert claims['role'] == 'manager'
        assert claims['location_id'] == str(location.pk)

    def test_wrong_password_is_invalid_credentials(self, api_client, make_user):
        make_user('staff')

        response = api_client.post(LOGIN_URL, {'email': 'staff@thrive.lk', 'password': 'nope'}, format='json')

        assert response.status_code == 401
        assert response.json() == {'success': False, 'error': 'Invalid email or password'}

    def test_unknown_email_is_invalid_credentials(self, api_client, db):
        response = api_client.post(LOGIN_URL, {'email': 'ghost@thrive.lk', 'password': 'x'}, format='json')

        assert response.status_code == 401
        assert response.json()['error'] == 'Invalid email or password'

    def test_inactive_account_is_refused_after_password_check(self, api_client, make_user):
        make_user('staff', account_status='suspended')

        response = api_client.post(LOGIN_URL, {'email': 'staff@thrive.lk', 'password': 'Secret123!'}, format='json')
        assert response.status_code == 401
        assert response.json()['error'] == 'Account is not active'

        response = api_client.post(LOGIN_URL, {'email': 'staff@thrive.lk', 'password': 'wrong'}, format='json')
        assert response.json()['error'] == 'Invalid email or password'

    def test_shared_email_picks_account_whose_password_matches(self, api_client, make_user, other_location):
        make_user('staff', email='shared@thrive.lk', password='first')
        second = make_user('manager', email='shared@thrive.lk', password='second', location=other_location)

        response = api_client.post(LOGIN_URL, {'email': 'shared@thrive.lk', 'password': 'second'}, format='json')

        assert response.status_code == 200
        assert response.json()['data']['user']['id'] == str(second.pk)

    def test_location_id_narrows_the_lookup(self, api_client, make_user, other_location):
        make_user('staff', email='shared@thrive.lk', password='same')

        response = api_client.post(LOGIN_URL, {
            'email': 'shared@thrive.lk', 'password': 'same', 'location_id': str(other_location.pk),
        }, format='json')

        assert response.status_code == 401

    def test_token_authenticates_requests(self, api_client, make_user):
        make_user('kitchen_staff')
        login = api_client.post(LOGIN_URL, {'email': 'kitchen_staff@thrive.lk', 'password': 'Secret123!'}, format='json')

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.json()['data']['token']}")
        response = api_client.get('/api/users/me/')

        assert response.status_code == 200
        assert response.json()['data']['role'] == 'kitchen_staff'

    def test_refresh_returns_new_access_token(self, api_client, make_user):
        make_user('staff')
        login = api_client.post(LOGIN_URL, {'email': 'staff@thrive.lk', 'password': 'Secret123!'}, format='json')

        response = api_client.post('/api/users/token/refresh/', {'refresh': login.json()['data']['refresh']}, format='json')

        assert response.status_code == 200
        assert response.json()['success'] is True
        assert 'access' in response.json()['data']


@pytest.mark.django_db
class TestAuthorization:
    """Test suite for role checks."""

    def test_missing_token_is_unauthorized(self, api_client):
        response = api_client.get('/api/locations/')

        assert response.status_code == 401
        assert response.json()['success'] is False

    def test_suspended_account_token_is_rejected(self, api_client, make_user):
        make_user('staff')
        login = api_client.post(LOGIN_URL, {'email': 'staff@thrive.lk', 'password': 'Secret123!'}, format='json')
        token = login.json()['data']['token']

        User.objects.filter(email='staff@thrive.lk').update(account_status='suspended')

        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        assert api_client.get('/api/users/me/').status_code == 401

    def test_role_outside_policy_is_forbidden(self, client_for):
        response = client_for('kitchen_staff').get('/api/users/', HTTP_X_LOCATION_ID='00000000-0000-0000-0000-000000000000')

        assert response.status_code == 403
        assert response.json()['success'] is False

    def test_authorize_accepts_and_rejects_roles(self, make_user):
        staff = make_user('staff')
        assert authorize(staff, FRONT_OF_HOUSE) is staff

        kitchen = make_user('kitchen_staff')
        with pytest.raises(PermissionDenied):
            authorize(kitchen, FRONT_OF_HOUSE)
