from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/delete/', views.delete_account, name='delete-account'),

    # Preferences
    path('preferences/', views.preferences, name='preferences'),
    path('preferences/reset/', views.reset_preferences, name='preferences-reset'),
    path('preferences/preferred-stores/', views.toggle_preferred_store, name='preferred-stores'),
]
