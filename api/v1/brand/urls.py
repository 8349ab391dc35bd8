"""
URL configuration for brand API endpoints.

Mounted under api/v1/brands/<uuid:brand_id>/.
"""

from django.urls import path

from api.v1.brand import views

urlpatterns = [
    path(
        "products",
        views.ProductListCreateView.as_view(),
        name="brand-products",
    ),
    path(
        "license-keys",
        views.LicenseKeyListCreateView.as_view(),
        name="brand-license-keys",
    ),
    path(
        "license-keys/<uuid:license_key_id>",
        views.LicenseKeyDetailView.as_view(),
        name="brand-license-key-detail",
    ),
    path(
        "licenses",
        views.LicenseCreateView.as_view(),
        name="brand-licenses",
    ),
    path(
        "licenses/<uuid:license_id>",
        views.LicenseDetailView.as_view(),
        name="brand-license-detail",
    ),
]
