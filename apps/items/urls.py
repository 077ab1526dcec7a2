from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'items'

# Note: categories must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'', views.ItemViewSet, basename='item')

urlpatterns = [
    # GET    /api/items/                               - Search own items
    # POST   /api/items/                               - Create item with first price
    # GET    /api/items/{id}/                          - Item details
    # PATCH  /api/items/{id}/                          - Update item
    # DELETE /api/items/{id}/                          - Deactivate item

    # GET    /api/items/categories/                    - List categories
    # POST   /api/items/categories/                    - Create category
    # GET    /api/items/categories/{id}/               - Category with items
    # DELETE /api/items/categories/{id}/               - Archive category
    # POST   /api/items/categories/{id}/add-item/      - Add item
    # POST   /api/items/categories/{id}/remove-item/   - Remove item
    path('', include(router.urls)),
]
