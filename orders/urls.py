from django.urls import path
from . import views

urlpatterns = [
    # =============== CUSTOMERS ===============
    path('customers/', views.CustomerListCreateView.as_view(), name='customer-list-create'),
    path('customers/<uuid:pk>/', views.CustomerDetailView.as_view(), name='customer-detail'),

    # =============== ORDERS ===============
    path('orders/', views.OrderListCreateView.as_view(), name='order-list-create'),
    path('orders/stats/', views.order_stats, name='order-stats'),
    path('orders/<uuid:pk>/', views.OrderDetailView.as_view(), name='order-detail'),
    path('orders/<uuid:pk>/status/', views.update_order_status, name='order-status'),
]
