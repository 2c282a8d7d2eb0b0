"""
Cases app URL configuration.

All routes are registered under the ``/api/fir/`` prefix.

Route Hierarchy
---------------
  /api/fir/                                  → list / create
  /api/fir/{id}/                             → retrieve

  ── Lifecycle @actions (resource-level RPC) ─────────────────────
  POST /api/fir/{id}/assign/{officer_id}/    → assign / reassign officer
  POST /api/fir/{id}/status/{status}/        → advance status
  POST /api/fir/{id}/close/                  → close
  POST /api/fir/{id}/reopen/                 → reopen
  POST /api/fir/{id}/link-criminal/          → link criminal record

  ── Read-only sub-resources ─────────────────────────────────────
  GET  /api/fir/{id}/status-log/
  GET  /api/fir/{id}/track/
"""

from rest_framework.routers import DefaultRouter

from .views import CaseViewSet

router = DefaultRouter()
router.register(
    prefix=r"fir",
    viewset=CaseViewSet,
    basename="fir",
)

urlpatterns = router.urls
