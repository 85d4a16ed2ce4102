from django.urls import path
from . import views

app_name = 'advance_booking'

urlpatterns = [
    path('', views.AdvanceBookingListView.as_view(), name='booking_list'),
    path('new/', views.AdvanceBookingCreateView.as_view(), name='booking_create'),
    path('<int:pk>/edit/', views.AdvanceBookingUpdateView.as_view(), name='booking_edit'),
    path('<int:pk>/delete/', views.AdvanceBookingDeleteView.as_view(), name='booking_delete'),
    path('<int:pk>/pdf/', views.AdvanceBookingPdfView.as_view(), name='booking_pdf'),
]
