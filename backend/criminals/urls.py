"""
Criminals app URL configuration.

  GET  /api/criminals/        → list
  POST /api/criminals/        → register
  GET  /api/criminals/{id}/   → retrieve
"""

from rest_framework.routers import DefaultRouter

from .views import CriminalViewSet

router = DefaultRouter()
router.register(
    prefix=r"criminals",
    viewset=CriminalViewSet,
    basename="criminal",
)

urlpatterns = router.urls
