from django.urls import path
from . import views

app_name = 'layaway'

urlpatterns = [
    path('', views.LayawayBillListView.as_view(), name='bill_list'),
    path('payments/', views.LayawayTransactionListView.as_view(), name='transaction_list'),
    path('payments/new/', views.LayawayTransactionCreateView.as_view(), name='transaction_create'),
    path('payments/<int:pk>/edit/', views.LayawayTransactionUpdateView.as_view(), name='transaction_edit'),
    path('payments/<int:pk>/delete/', views.LayawayTransactionDeleteView.as_view(),
         name='transaction_delete'),
    path('bills/<int:bill_pk>/', views.LayawayBillDetailView.as_view(), name='bill_detail'),
    path('bills/<int:bill_pk>/statement/', views.LayawayStatementPdfView.as_view(), name='statement_pdf'),
    path('tracking/', views.PaymentTrackingView.as_view(), name='payment_tracking'),
]
