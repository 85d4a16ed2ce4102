from django.urls import path
from . import views

app_name = 'inventory'

urlpatterns = [
    path('', views.ItemListView.as_view(), name='item_list'),
    path('new/', views.ItemCreateView.as_view(), name='item_create'),
    path('import/', views.ItemImportView.as_view(), name='item_import'),
    path('lookup/', views.ItemLookupView.as_view(), name='item_lookup'),
    path('search/', views.ItemSearchView.as_view(), name='item_search'),
    path('<int:pk>/edit/', views.ItemUpdateView.as_view(), name='item_edit'),
    path('<int:pk>/delete/', views.ItemDeleteView.as_view(), name='item_delete'),
    path('gold-rates/', views.GoldRateListView.as_view(), name='gold_rate_list'),
    path('gold-rates/set/', views.GoldRateSetView.as_view(), name='gold_rate_set'),
]
