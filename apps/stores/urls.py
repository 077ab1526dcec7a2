from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stores'

router = DefaultRouter()
router.register(r'', views.StoreViewSet, basename='store')

urlpatterns = [
    # GET    /api/stores/                  - List available stores (filters)
    # POST   /api/stores/                  - Create own store
    # GET    /api/stores/{id}/             - Store details
    # PATCH  /api/stores/{id}/             - Update own store
    # DELETE /api/stores/{id}/             - Deactivate own store
    # POST   /api/stores/{id}/reactivate/  - Reactivate own store
    # DELETE /api/stores/{id}/purge/       - Hard delete global store (admin)
    path('', include(router.urls)),
]
