"""
Stations app URL configuration.

  GET /api/stations/                  → list approved stations
  GET /api/stations/{sid}/            → retrieve
  GET /api/stations/{sid}/officers/   → officer roster
"""

from rest_framework.routers import DefaultRouter

from .views import StationViewSet

router = DefaultRouter()
router.register(
    prefix=r"stations",
    viewset=StationViewSet,
    basename="station",
)

urlpatterns = router.urls
