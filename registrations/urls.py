from django.urls import path

from registrations.handlers import (
    DashboardView,
    DropdownView,
    EventSearchView,
    PageView,
    RefreshView,
    SearchView,
    SelectView,
)

urlpatterns = [
    path("dashboard", DashboardView.as_view(), name="dashboard"),
    path("dashboard/refresh", RefreshView.as_view(), name="dashboard-refresh"),
    path("dashboard/search", SearchView.as_view(), name="dashboard-search"),
    path("dashboard/page", PageView.as_view(), name="dashboard-page"),
    path("dashboard/dropdown", DropdownView.as_view(), name="dashboard-dropdown"),
    path("dashboard/event-search", EventSearchView.as_view(), name="dashboard-event-search"),
    path(
        "dashboard/records/<int:record_id>/select",
        SelectView.as_view(),
        name="dashboard-select",
    ),
]
