"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Load the operator's view state from the session
- Call the dashboard service for every transition
- Map domain errors to HTTP responses
- Never expose internal error details
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from registrations.domain import FieldKind, ViewState, build_update
from registrations.domain.errors import DomainError, ErrorCode
from registrations.handlers.serializers import (
    DashboardSerializer,
    DropdownSerializer,
    PageSerializer,
    SearchSerializer,
    SelectSerializer,
)
from registrations.services.dashboard_service import DashboardService
from registrations.services.fetch_sequence import CacheFetchSequence
from registrations.stores import get_record_store

logger = logging.getLogger(__name__)

SESSION_KEY = "registrations.dashboard"

ERROR_STATUS = {
    ErrorCode.RECORD_NOT_LOADED: status.HTTP_404_NOT_FOUND,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


class DashboardAPIView(APIView):
    """Base handler: one dashboard transition per request."""

    def get_service(self, request: Request) -> DashboardService:
        data = request.session.get(SESSION_KEY)
        if data is None:
            state = ViewState(page_size=settings.DASHBOARD_PAGE_SIZE)
        else:
            state = ViewState.from_dict(data)
        if request.session.session_key is None:
            request.session.save()
        sequence = CacheFetchSequence(request.session.session_key)
        return DashboardService(get_record_store(), state, sequence)

    def run(self, request: Request, action) -> Response:
        service = self.get_service(request)
        try:
            action(service)
        except DomainError as e:
            logger.info("Rejected dashboard action: %s", e)
            self._save(request, service)
            return error_response(e)
        return self.respond(request, service)

    def respond(self, request: Request, service: DashboardService) -> Response:
        notifications = service.state.drain_notifications()
        self._save(request, service)
        serializer = DashboardSerializer(service.state, context={"notifications": notifications})
        return Response(serializer.data)

    def _save(self, request: Request, service: DashboardService) -> None:
        if service.stale:
            # A newer request of this session already stored its records.
            logger.info("Not saving dashboard state overtaken by a newer fetch")
            return
        request.session[SESSION_KEY] = service.state.to_dict()


class DashboardView(DashboardAPIView):
    """Handler for GET /api/dashboard"""

    def get(self, request: Request) -> Response:
        def show(service: DashboardService) -> None:
            if not service.state.loaded:
                service.load()

        return self.run(request, show)


class RefreshView(DashboardAPIView):
    """Handler for POST /api/dashboard/refresh"""

    def post(self, request: Request) -> Response:
        return self.run(request, lambda service: service.refresh())


class SearchView(DashboardAPIView):
    """Handler for POST /api/dashboard/search"""

    def post(self, request: Request) -> Response:
        serializer = SearchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        term = serializer.validated_data["term"]
        return self.run(request, lambda service: service.search(term))


class PageView(DashboardAPIView):
    """Handler for POST /api/dashboard/page"""

    def post(self, request: Request) -> Response:
        serializer = PageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        page = serializer.validated_data["page"]
        return self.run(request, lambda service: service.go_to_page(page))


class DropdownView(DashboardAPIView):
    """Handler for POST/DELETE /api/dashboard/dropdown"""

    def post(self, request: Request) -> Response:
        serializer = DropdownSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        def open_dropdown(service: DashboardService) -> None:
            service.open_dropdown(data["record_id"], FieldKind.parse(data["field"]))

        return self.run(request, open_dropdown)

    def delete(self, request: Request) -> Response:
        return self.run(request, lambda service: service.close_dropdown())


class EventSearchView(DashboardAPIView):
    """Handler for POST /api/dashboard/event-search"""

    def post(self, request: Request) -> Response:
        serializer = SearchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        term = serializer.validated_data["term"]
        return self.run(request, lambda service: service.set_event_search(term))


class SelectView(DashboardAPIView):
    """Handler for POST /api/dashboard/records/{record_id}/select"""

    def post(self, request: Request, record_id: int) -> Response:
        serializer = SelectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        def select(service: DashboardService) -> None:
            try:
                update = build_update(FieldKind.parse(data["field"]), data["value"])
            except DomainError:
                service.close_dropdown()
                raise
            service.select(record_id, update)

        return self.run(request, select)
