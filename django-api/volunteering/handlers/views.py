"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from functools import wraps

from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from volunteering.domain.clock import SystemClock
from volunteering.domain.errors import DomainError, ErrorCode
from volunteering.domain.value_objects import PublicationTrigger
from volunteering.handlers.serializers import (
    AdjustmentSerializer,
    AdjustRequestSerializer,
    ProjectOverviewSerializer,
    PublicationResultSerializer,
    PublishRequestSerializer,
    SessionSerializer,
    SignupHoursSerializer,
    SignupCreateRequestSerializer,
    SignupRequestSerializer,
    SignupSerializer,
    UpdateTimesRequestSerializer,
)
from volunteering.services import (
    AttendanceService,
    PublicationService,
    SessionService,
    SignupService,
)
from volunteering.stores.cached_store import CachedProjectStore
from volunteering.stores.django_store import (
    DjangoCertificateIssuer,
    DjangoProjectStore,
    DjangoSignupStore,
)

ERROR_STATUS = {
    ErrorCode.INVALID_PROJECT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PROJECT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_UNAVAILABLE: status.HTTP_404_NOT_FOUND,
    ErrorCode.SIGNUP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHECK_IN_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.NOT_CHECKED_IN: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_LOCKED: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_NOT_PUBLISHABLE: status.HTTP_409_CONFLICT,
    ErrorCode.PUBLICATION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.SIGNUP_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_FULL: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_SIGNED_UP: status.HTTP_409_CONFLICT,
    ErrorCode.CANCELLATION_CLOSED: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def maps_domain_errors(handler):
    @wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except DomainError as error:
            return error_response(error)

    return wrapper


def session_service() -> SessionService:
    return SessionService(
        CachedProjectStore(DjangoProjectStore()),
        DjangoSignupStore(),
        clock=SystemClock(),
        local_tz=timezone.get_default_timezone(),
    )


def attendance_service() -> AttendanceService:
    return AttendanceService(
        CachedProjectStore(DjangoProjectStore()),
        DjangoSignupStore(),
        clock=SystemClock(),
        local_tz=timezone.get_default_timezone(),
    )


def signup_service() -> SignupService:
    return SignupService(
        CachedProjectStore(DjangoProjectStore()),
        DjangoSignupStore(),
        clock=SystemClock(),
        local_tz=timezone.get_default_timezone(),
    )


def publication_service() -> PublicationService:
    return PublicationService(
        CachedProjectStore(DjangoProjectStore()),
        DjangoSignupStore(),
        DjangoCertificateIssuer(),
        clock=SystemClock(),
        local_tz=timezone.get_default_timezone(),
    )


class ProjectPhaseView(APIView):
    """Handler for GET /api/projects/{project_id}/phase"""

    @maps_domain_errors
    def get(self, request: Request, project_id: str) -> Response:
        overview = session_service().project_overview(project_id)
        return Response(ProjectOverviewSerializer(overview).data)


class SessionListView(APIView):
    """Handler for GET /api/projects/{project_id}/sessions"""

    @maps_domain_errors
    def get(self, request: Request, project_id: str) -> Response:
        views = session_service().list_sessions(project_id)
        return Response({"results": SessionSerializer(views, many=True).data})


class SessionDetailView(APIView):
    """Handler for GET /api/projects/{project_id}/sessions/{session_id}"""

    @maps_domain_errors
    def get(self, request: Request, project_id: str, session_id: str) -> Response:
        view = session_service().get_session(project_id, session_id)
        return Response(SessionSerializer(view).data)


class SessionHoursView(APIView):
    """Handler for GET /api/projects/{project_id}/sessions/{session_id}/hours"""

    @maps_domain_errors
    def get(self, request: Request, project_id: str, session_id: str) -> Response:
        hours = attendance_service().session_hours(project_id, session_id)
        return Response({"results": SignupHoursSerializer(hours, many=True).data})


class CheckInView(APIView):
    """Handler for POST /api/projects/{project_id}/sessions/{session_id}/check-in"""

    @maps_domain_errors
    def post(self, request: Request, project_id: str, session_id: str) -> Response:
        payload = SignupRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        signup = attendance_service().check_in(
            project_id, session_id, str(payload.validated_data["signup_id"])
        )
        return Response(SignupSerializer(signup).data)


class CheckOutView(APIView):
    """Handler for POST /api/projects/{project_id}/sessions/{session_id}/check-out"""

    @maps_domain_errors
    def post(self, request: Request, project_id: str, session_id: str) -> Response:
        payload = SignupRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        signup = attendance_service().check_out(
            project_id, session_id, str(payload.validated_data["signup_id"])
        )
        return Response(SignupSerializer(signup).data)


class SignupTimesView(APIView):
    """Handler for PUT /api/projects/{project_id}/sessions/{session_id}/signups/{signup_id}/times"""

    @maps_domain_errors
    def put(
        self, request: Request, project_id: str, session_id: str, signup_id: str
    ) -> Response:
        payload = UpdateTimesRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        hours = attendance_service().update_times(
            project_id,
            session_id,
            signup_id,
            payload.validated_data["check_in_time"],
            payload.validated_data["check_out_time"],
        )
        return Response(SignupHoursSerializer(hours).data)


class BulkAdjustView(APIView):
    """Handler for POST /api/projects/{project_id}/sessions/{session_id}/adjust"""

    @maps_domain_errors
    def post(self, request: Request, project_id: str, session_id: str) -> Response:
        payload = AdjustRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        signup_ids = payload.validated_data.get("signup_ids")
        adjustments = attendance_service().bulk_adjust(
            project_id,
            session_id,
            payload.validated_data["offset_minutes"],
            [str(signup_id) for signup_id in signup_ids] if signup_ids else None,
        )
        return Response({"results": AdjustmentSerializer(adjustments, many=True).data})


class PublishHoursView(APIView):
    """Handler for POST /api/projects/{project_id}/sessions/{session_id}/publish"""

    @maps_domain_errors
    def post(self, request: Request, project_id: str, session_id: str) -> Response:
        payload = PublishRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        result = publication_service().publish_session(
            project_id,
            session_id,
            PublicationTrigger(payload.validated_data["trigger"]),
        )
        code = status.HTTP_200_OK if result.already_published else status.HTTP_201_CREATED
        return Response(PublicationResultSerializer(result).data, status=code)


class SessionSignupView(APIView):
    """Handler for POST /api/projects/{project_id}/sessions/{session_id}/signups"""

    @maps_domain_errors
    def post(self, request: Request, project_id: str, session_id: str) -> Response:
        payload = SignupCreateRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        signup = signup_service().sign_up(
            project_id,
            session_id,
            user_id=payload.validated_data.get("user_id"),
            name=payload.validated_data.get("name"),
            email=payload.validated_data.get("email"),
        )
        return Response(SignupSerializer(signup).data, status=status.HTTP_201_CREATED)


class SignupDetailView(APIView):
    """Handler for DELETE /api/projects/{project_id}/signups/{signup_id}"""

    @maps_domain_errors
    def delete(self, request: Request, project_id: str, signup_id: str) -> Response:
        signup_service().cancel_signup(project_id, signup_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
