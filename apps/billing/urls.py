from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    path('', views.BillListView.as_view(), name='bill_list'),
    path('new/', views.BillCreateView.as_view(), name='bill_create'),
    path('preview/', views.BillPreviewView.as_view(), name='bill_preview'),
    path('<int:pk>/', views.BillDetailView.as_view(), name='bill_detail'),
    path('<int:pk>/edit/', views.BillUpdateView.as_view(), name='bill_edit'),
    path('<int:pk>/cancel/', views.BillCancelView.as_view(), name='bill_cancel'),
    path('<int:pk>/delete/', views.BillDeleteView.as_view(), name='bill_delete'),
    path('<int:pk>/pdf/', views.BillPdfView.as_view(), name='bill_pdf'),
    path('<int:pk>/items/<int:item_pk>/return/', views.SaleReturnView.as_view(), name='sale_return'),
]
