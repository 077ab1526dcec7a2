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
def other_store(db, other_user):
    return Store.objects.create(name='Secret Bakery', store_type='bakery', owner=other_user)


@pytest.fixture
def item(db, user, store):
    """An item with one active EUR price."""
    item = Item.objects.create(owner=user, name='Milk', brand='Rajo', unit='liter')
    PriceObservation.objects.create(
        item=item,
        store=store,
        price=Decimal('1.29'),
        currency='EUR',
        observation_date=date(2024, 1, 10),
    )
    return item


@pytest.fixture
def other_item(db, other_user):
    return Item.objects.create(owner=other_user, name='Bread')


@pytest.fixture
def category(db, user):
    return Category.objects.create(owner=user, name='Dairy')


@pytest.fixture
def initial_price(store):
    return {
        'store_id': store.id,
        'price': Decimal('2.49'),
        'currency': 'EUR',
        'observation_date': date(2024, 3, 1),
    }
