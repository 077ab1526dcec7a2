import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from apps.accounts.models import User, UserPreferences
from apps.stores.models import Store
from apps.items.models import Item
from apps.shopping.models import ShoppingList, ShoppingListItem


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    user = User.objects.create_user(
        email='testuser@example.com',
        password='testpass123',
        username='testuser',
    )
    UserPreferences.ensure_for(user)
    return user


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
def item(db, user):
    return Item.objects.create(owner=user, name='Milk', unit='liter')


@pytest.fixture
def other_item(db, other_user):
    return Item.objects.create(owner=other_user, name='Bread')


@pytest.fixture
def shopping_list(db, user):
    return ShoppingList.objects.create(owner=user, name='Weekly')


@pytest.fixture
def entry(shopping_list, item, store):
    return ShoppingListItem.objects.create(
        shopping_list=shopping_list,
        item=item,
        store=store,
        quantity=Decimal('2'),
    )
