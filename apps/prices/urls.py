from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'prices'

router = DefaultRouter()
router.register(r'alerts', views.PriceAlertViewSet, basename='alert')
router.register(r'reports', views.InflationReportViewSet, basename='report')

urlpatterns = [
    # Observation search
    path('observations/', views.observation_search, name='observation-search'),
    path('observations/<uuid:observation_id>/', views.observation_notes, name='observation-notes'),

    # Per-item price engine
    path('items/<uuid:item_id>/observations/', views.item_observations, name='item-observations'),
    path('items/<uuid:item_id>/latest/', views.latest_price, name='latest-price'),
    path('items/<uuid:item_id>/inflation/', views.item_inflation, name='item-inflation'),

    # Alerts and reports
    # GET/POST /api/prices/alerts/, GET/DELETE /api/prices/alerts/{id}/
    # GET/POST /api/prices/reports/, GET/DELETE /api/prices/reports/{id}/
    path('', include(router.urls)),
]
