from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'shopping'

router = DefaultRouter()
router.register(r'', views.ShoppingListViewSet, basename='shopping-list')

urlpatterns = [
    # GET    /api/shopping-lists/                                  - Own active lists
    # POST   /api/shopping-lists/                                  - Create list
    # GET    /api/shopping-lists/{id}/                             - List with entries and total
    # PATCH  /api/shopping-lists/{id}/                             - Update list
    # DELETE /api/shopping-lists/{id}/                             - Deactivate list and entries
    # POST   /api/shopping-lists/{id}/items/                       - Add entry
    # DELETE /api/shopping-lists/{id}/items/{entry_id}/            - Remove entry
    # POST   /api/shopping-lists/{id}/items/{entry_id}/purchase/   - Mark entry purchased
    path('', include(router.urls)),
]
