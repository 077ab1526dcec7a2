import uuid
import pytest
from django.urls import reverse
from rest_framework import status
from apps.items.models import Item


@pytest.mark.django_db
class TestItemCreate:
    """Tests for POST /api/items/"""

    def test_create_with_initial_price(self, authenticated_client, store):
        data = {
            'name': 'Butter',
            'unit': 'piece',
            'initial_price': {
                'store_id': str(store.id),
                'price': '2.49',
                'currency': 'EUR',
                'observation_date': '2024-03-01',
            },
        }
        response = authenticated_client.post(reverse('items:item-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['latest_price']['price'] == '2.49'
        assert response.data['latest_price']['store_name'] == 'Billa'

    def test_initial_price_required(self, authenticated_client):
        response = authenticated_client.post(
            reverse('items:item-list'), {'name': 'Butter'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'initial_price' in response.data

    def test_future_observation_date(self, authenticated_client, store):
        data = {
            'name': 'Butter',
            'initial_price': {
                'store_id': str(store.id),
                'price': '2.49',
                'currency': 'EUR',
                'observation_date': '2999-01-01',
            },
        }
        response = authenticated_client.post(reverse('items:item-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_store(self, authenticated_client):
        data = {
            'name': 'Butter',
            'initial_price': {
                'store_id': str(uuid.uuid4()),
                'price': '2.49',
                'currency': 'EUR',
                'observation_date': '2024-03-01',
            },
        }
        response = authenticated_client.post(reverse('items:item-list'), data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_duplicate(self, authenticated_client, item, store):
        data = {
            'name': 'Milk',
            'brand': 'Rajo',
            'initial_price': {
                'store_id': str(store.id),
                'price': '1.39',
                'currency': 'EUR',
                'observation_date': '2024-03-01',
            },
        }
        response = authenticated_client.post(reverse('items:item-list'), data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestItemReadWrite:

    def test_list_own_items(self, authenticated_client, item, other_item):
        response = authenticated_client.get(reverse('items:item-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [i['name'] for i in response.data['results']] == ['Milk']

    def test_list_filter_unit(self, authenticated_client, item):
        response = authenticated_client.get(reverse('items:item-list'), {'unit': 'kilogram'})

        assert response.data['count'] == 0

    def test_retrieve_other_users_item(self, authenticated_client, other_item):
        response = authenticated_client.get(reverse('items:item-detail', args=[other_item.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch(self, authenticated_client, item):
        url = reverse('items:item-detail', args=[item.id])
        response = authenticated_client.patch(url, {'is_favorite': True}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_favorite'] is True

    def test_delete_is_soft(self, authenticated_client, item):
        response = authenticated_client.delete(reverse('items:item-detail', args=[item.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Item.objects.get(id=item.id).is_active is False

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('items:item-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestCategoryApi:

    def test_create_and_list(self, authenticated_client):
        response = authenticated_client.post(reverse('items:category-list'), {'name': 'Fruit'})
        assert response.status_code == status.HTTP_201_CREATED

        response = authenticated_client.get(reverse('items:category-list'))
        assert [c['name'] for c in response.data] == ['Fruit']
        assert response.data[0]['item_count'] == 0

    def test_create_duplicate(self, authenticated_client, category):
        response = authenticated_client.post(reverse('items:category-list'), {'name': 'Dairy'})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_add_and_remove_item(self, authenticated_client, category, item):
        add_url = reverse('items:category-add-item', args=[category.id])
        response = authenticated_client.post(add_url, {'item_id': str(item.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [i['name'] for i in response.data['items']] == ['Milk']

        response = authenticated_client.post(add_url, {'item_id': str(item.id)})
        assert response.status_code == status.HTTP_409_CONFLICT

        remove_url = reverse('items:category-remove-item', args=[category.id])
        response = authenticated_client.post(remove_url, {'item_id': str(item.id)})
        assert response.data['items'] == []

        response = authenticated_client.post(remove_url, {'item_id': str(item.id)})
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_archive(self, authenticated_client, category):
        response = authenticated_client.delete(reverse('items:category-detail', args=[category.id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        response = authenticated_client.get(reverse('items:category-detail', args=[category.id]))
        assert response.status_code == status.HTTP_404_NOT_FOUND
