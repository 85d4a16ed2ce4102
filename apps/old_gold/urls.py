from django.urls import path
from . import views

app_name = 'old_gold'

urlpatterns = [
    path('', views.OldGoldListView.as_view(), name='list'),
]
