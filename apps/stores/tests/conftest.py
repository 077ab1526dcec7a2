import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.stores.models import Store


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='testuser@example.com',
        password='testpass123',
        username='testuser',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='otheruser@example.com',
        password='otherpass123',
        username='otheruser',
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        email='admin@example.com',
        password='adminpass123',
        username='admin',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def global_store(db):
    return Store.objects.create(
        name='Billa',
        store_type='supermarket',
        city='Vienna',
        country='Austria',
        website='https://billa.at',
    )


@pytest.fixture
def own_store(db, user):
    return Store.objects.create(
        name='Farmers Market',
        store_type='greengrocer',
        city='Brno',
        region='South Moravia',
        country='Czechia',
        owner=user,
    )


@pytest.fixture
def other_store(db, other_user):
    return Store.objects.create(name='Secret Bakery', store_type='bakery', owner=other_user)
