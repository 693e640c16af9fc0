# salekeeper/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django Admin
    path('admin/', admin.site.urls),

    # ============ API ENDPOINTS ============
    path('api/auth/', include('accounts.urls')),
    path('api/stores/', include('stores.urls')),
    path('api/sales/', include('sales.urls')),
    path('api/expenses/', include('expenses.urls')),
    path('api/staff/', include('staff.urls')),
    path('api/menu/', include('menu.urls')),
    path('api/timeline/', include('timeline.urls')),
    path('api/dashboard/', include('dashboard.urls')),
    path('api/', include('core.urls')),
]

# Admin site customization
admin.site.site_header = "Sales Keeper Admin"
admin.site.site_title = "Sales Keeper Admin"
admin.site.index_title = "Store bookkeeping"
