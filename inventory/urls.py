from django.urls import path
from . import views

urlpatterns = [
    # =============== SETTINGS / TAXONOMY ===============
    path('settings/categories/', views.FoodCategoryListCreateView.as_view(), name='category-list-create'),
    path('settings/categories/<uuid:pk>/', views.FoodCategoryDetailView.as_view(), name='category-detail'),
    path('settings/types/', views.FoodTypeListCreateView.as_view(), name='food-type-list-create'),
    path('settings/types/<uuid:pk>/', views.FoodTypeDetailView.as_view(), name='food-type-detail'),
    path('settings/specifications/', views.SpecificationListCreateView.as_view(), name='specification-list-create'),
    path('settings/specifications/<uuid:pk>/', views.SpecificationDetailView.as_view(), name='specification-detail'),
    path('settings/cook-types/', views.CookTypeListCreateView.as_view(), name='cook-type-list-create'),
    path('settings/cook-types/<uuid:pk>/', views.CookTypeDetailView.as_view(), name='cook-type-detail'),

    # =============== INGREDIENTS ===============
    path('ingredients/', views.IngredientListCreateView.as_view(), name='ingredient-list-create'),
    path('ingredients/by-category/', views.IngredientsByCategoryView.as_view(), name='ingredients-by-category'),
    path('ingredients/<uuid:pk>/', views.IngredientDetailView.as_view(), name='ingredient-detail'),

    # =============== MENU ===============
    path('menu/', views.MenuItemListCreateView.as_view(), name='menu-list-create'),
    path('menu/<uuid:pk>/', views.MenuItemDetailView.as_view(), name='menu-detail'),
    path('menu/<uuid:pk>/toggle-status/', views.MenuItemToggleStatusView.as_view(), name='menu-toggle-status'),
]
