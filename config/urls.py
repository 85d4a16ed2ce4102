"""
URL Configuration for Swarna project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    path('', include('apps.authentication.urls')),
    path('', include('apps.dashboard.urls')),
    path('audit-log/', include('apps.core.urls')),
    path('customers/', include('apps.customers.urls')),
    path('inventory/', include('apps.inventory.urls')),
    path('sales/', include('apps.billing.urls')),
    path('old-gold/', include('apps.old_gold.urls')),
    path('advance-bookings/', include('apps.advance_booking.urls')),
    path('layaway/', include('apps.layaway.urls')),
    path('purchases/', include('apps.purchases.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
