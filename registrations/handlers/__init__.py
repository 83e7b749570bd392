from registrations.handlers.views import (
    DashboardView,
    DropdownView,
    EventSearchView,
    PageView,
    RefreshView,
    SearchView,
    SelectView,
)

__all__ = [
    "DashboardView",
    "DropdownView",
    "EventSearchView",
    "PageView",
    "RefreshView",
    "SearchView",
    "SelectView",
]
