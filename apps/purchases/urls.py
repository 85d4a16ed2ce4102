from django.urls import path
from . import views

app_name = 'purchases'

urlpatterns = [
    path('', views.PurchaseBillListView.as_view(), name='purchase_list'),
    path('new/', views.PurchaseBillCreateView.as_view(), name='purchase_create'),
    path('<int:pk>/', views.PurchaseBillDetailView.as_view(), name='purchase_detail'),
    path('<int:pk>/pdf/', views.PurchaseBillPdfView.as_view(), name='purchase_pdf'),
    path('<int:pk>/delete/', views.PurchaseBillDeleteView.as_view(), name='purchase_delete'),
]
