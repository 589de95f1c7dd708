from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON endpoints of the trading ledger
    path("api/", include("apmc_core.urls")),
]
