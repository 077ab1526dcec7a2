import uuid
import pytest
from datetime import date
from django.urls import reverse
from rest_framework import status
from apps.prices.models import PriceObservation, PriceAlert


@pytest.mark.django_db
class TestInflationApi:
    """Tests for GET /api/prices/items/{id}/inflation/"""

    def test_rate(self, authenticated_client, item, rising_prices):
        url = reverse('prices:item-inflation', args=[item.id])
        response = authenticated_client.get(
            url, {'currency': 'EUR', 'start_date': '2024-01-01', 'end_date': '2024-01-31'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['inflation_rate'] == '50.00'
        assert response.data['price_difference'] == '1.00'
        assert response.data['has_sufficient_data'] is True

    def test_insufficient_data_is_not_an_error(self, authenticated_client, item, observe):
        observe(item, '2.00', date(2024, 1, 10))

        url = reverse('prices:item-inflation', args=[item.id])
        response = authenticated_client.get(
            url, {'currency': 'EUR', 'start_date': '2024-01-01', 'end_date': '2024-01-31'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['inflation_rate'] is None
        assert response.data['has_sufficient_data'] is False
        assert response.data['insufficient_data_message']

    def test_missing_currency(self, authenticated_client, item):
        url = reverse('prices:item-inflation', args=[item.id])
        response = authenticated_client.get(url, {'start_date': '2024-01-01', 'end_date': '2024-01-31'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_inverted_range(self, authenticated_client, item):
        url = reverse('prices:item-inflation', args=[item.id])
        response = authenticated_client.get(
            url, {'currency': 'EUR', 'start_date': '2024-02-01', 'end_date': '2024-01-01'}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_users_item(self, authenticated_client, other_item):
        url = reverse('prices:item-inflation', args=[other_item.id])
        response = authenticated_client.get(
            url, {'currency': 'EUR', 'start_date': '2024-01-01', 'end_date': '2024-01-31'}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_extreme_price_range(self, authenticated_client, item, observe):
        observe(item, '0.01', date(2024, 1, 1))
        observe(item, '99999999.99', date(2024, 1, 31))

        url = reverse('prices:item-inflation', args=[item.id])
        response = authenticated_client.get(
            url, {'currency': 'EUR', 'start_date': '2024-01-01', 'end_date': '2024-01-31'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['price_difference'] == '99999999.98'
        assert response.data['inflation_rate'] == '999999999800.00'


@pytest.mark.django_db
class TestObservationApi:

    def test_search_is_scoped_to_user(self, authenticated_client, rising_prices, other_item, observe):
        observe(other_item, '1.00', date(2024, 1, 1))

        response = authenticated_client.get(reverse('prices:observation-search'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3
        assert response.data['num_pages'] == 1

    def test_search_filters_and_pages(self, authenticated_client, rising_prices):
        response = authenticated_client.get(
            reverse('prices:observation-search'),
            {'is_active': 'false', 'ordering': 'price', 'page_size': 1, 'page': 2},
        )

        assert response.data['count'] == 2
        assert [o['price'] for o in response.data['results']] == ['2.50']

    def test_invalid_ordering(self, authenticated_client):
        response = authenticated_client.get(reverse('prices:observation-search'), {'ordering': 'notes'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_item_history(self, authenticated_client, item, rising_prices):
        url = reverse('prices:item-observations', args=[item.id])
        response = authenticated_client.get(url, {'min_price': '2.50'})

        assert response.data['count'] == 2

    def test_item_history_of_other_users_item(self, authenticated_client, other_item, observe):
        observe(other_item, '1.00', date(2024, 1, 1))

        url = reverse('prices:item-observations', args=[other_item.id])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_item_history_of_unknown_item(self, authenticated_client):
        url = reverse('prices:item-observations', args=[uuid.uuid4()])
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_record_price(self, authenticated_client, item, store, rising_prices):
        url = reverse('prices:item-observations', args=[item.id])
        data = {
            'store_id': str(store.id),
            'price': '3.20',
            'currency': 'EUR',
            'observation_date': '2024-02-10',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert PriceObservation.objects.filter(item=item, is_active=True).count() == 1

        latest = authenticated_client.get(reverse('prices:latest-price', args=[item.id]))
        assert latest.data['price'] == '3.20'

    def test_record_zero_price(self, authenticated_client, item, store):
        url = reverse('prices:item-observations', args=[item.id])
        data = {
            'store_id': str(store.id),
            'price': '0.00',
            'currency': 'EUR',
            'observation_date': '2024-02-10',
        }
        response = authenticated_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_latest_price_missing(self, authenticated_client, item):
        response = authenticated_client.get(reverse('prices:latest-price', args=[item.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_edit_notes(self, authenticated_client, rising_prices):
        observation = rising_prices[0]
        url = reverse('prices:observation-notes', args=[observation.id])
        response = authenticated_client.patch(url, {'notes': 'weekly offer'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['notes'] == 'weekly offer'
        assert response.data['price'] == '2.00'


@pytest.mark.django_db
class TestAlertAndReportApi:

    def test_create_and_list_alert(self, authenticated_client, item):
        data = {'item_id': str(item.id), 'alert_type': 'target_price', 'target_price': '1.99'}
        response = authenticated_client.post(reverse('prices:alert-list'), data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['currency'] == 'EUR'

        response = authenticated_client.get(reverse('prices:alert-list'), {'item': str(item.id)})
        assert len(response.data) == 1

    def test_invalid_alert(self, authenticated_client, item):
        data = {'item_id': str(item.id), 'alert_type': 'target_price'}
        response = authenticated_client.post(reverse('prices:alert-list'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_alert(self, authenticated_client, user, item):
        alert = PriceAlert.objects.create(user=user, item=item, alert_type='price_drop')

        response = authenticated_client.delete(reverse('prices:alert-detail', args=[alert.id]))
        assert response.status_code == status.HTTP_204_NO_CONTENT

        response = authenticated_client.delete(reverse('prices:alert-detail', args=[alert.id]))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_generate_report(self, authenticated_client, category, item, rising_prices):
        category.items.add(item)
        data = {
            'category_id': str(category.id),
            'report_type': 'custom',
            'currency': 'EUR',
            'start_date': '2024-01-01',
            'end_date': '2024-01-31',
        }
        response = authenticated_client.post(reverse('prices:report-list'), data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['inflation_rate'] == '50.00'
        assert response.data['items_included'] == 1

    def test_custom_report_without_dates(self, authenticated_client, category):
        data = {'category_id': str(category.id), 'report_type': 'custom', 'currency': 'EUR'}
        response = authenticated_client.post(reverse('prices:report-list'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_category(self, authenticated_client):
        data = {'category_id': str(uuid.uuid4()), 'report_type': 'yearly', 'currency': 'EUR'}
        response = authenticated_client.post(reverse('prices:report-list'), data)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_report_with_extreme_price_range(self, authenticated_client, category, item, observe):
        observe(item, '0.01', date(2024, 1, 1))
        observe(item, '99999999.99', date(2024, 1, 31))
        category.items.add(item)
        data = {
            'category_id': str(category.id),
            'report_type': 'custom',
            'currency': 'EUR',
            'start_date': '2024-01-01',
            'end_date': '2024-01-31',
        }
        response = authenticated_client.post(reverse('prices:report-list'), data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['inflation_rate'] == '999999999800.00'
