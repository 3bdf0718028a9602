from django.urls import path

from . import views

urlpatterns = [
    # =============== AUTHENTICATION ===============
    path('users/login/', views.LoginView.as_view(), name='login'),
    path('users/token/refresh/', views.RefreshView.as_view(), name='token_refresh'),
    path('users/me/', views.MeView.as_view(), name='me'),

    # =============== USER MANAGEMENT ===============
    path('users/', views.UserListCreateView.as_view(), name='user_list_create'),
    path('users/<uuid:pk>/', views.UserDetailView.as_view(), name='user_detail'),

    # =============== LOCATIONS ===============
    path('locations/', views.LocationListCreateView.as_view(), name='location_list_create'),
    path('locations/<uuid:pk>/', views.LocationDetailView.as_view(), name='location_detail'),
]
