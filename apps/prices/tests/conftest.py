import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.stores.models import Store
from apps.items.models import Item, Category
from apps.prices.models import PriceObservation


@pytest.fixture
def api_client():
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
def authenticated_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def store(db):
    return Store.objects.create(name='Billa', store_type='supermarket', city='Vienna')


@pytest.fixture
def bakery(db, user):
    return Store.objects.create(name='Corner Bakery', store_type='bakery', city='Brno', owner=user)


@pytest.fixture
def item(db, user):
    return Item.objects.create(owner=user, name='Milk', unit='liter')


@pytest.fixture
def other_item(db, other_user):
    return Item.objects.create(owner=other_user, name='Bread')


@pytest.fixture
def category(db, user):
    return Category.objects.create(owner=user, name='Dairy')


@pytest.fixture
def observe(store):
    """Factory storing an observation directly, bypassing services."""

    def _observe(item, price, on, currency='EUR', at=None, is_active=True):
        return PriceObservation.objects.create(
            item=item,
            store=at or store,
            price=Decimal(price),
            currency=currency,
            observation_date=on,
            is_active=is_active,
        )

    return _observe


@pytest.fixture
def rising_prices(item, observe):
    """2.00 -> 2.50 -> 3.00 EUR during January 2024."""
    return [
        observe(item, '2.00', date(2024, 1, 1), is_active=False),
        observe(item, '2.50', date(2024, 1, 15), is_active=False),
        observe(item, '3.00', date(2024, 1, 31)),
    ]
