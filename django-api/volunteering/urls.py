from django.urls import path

from volunteering.handlers import (
    BulkAdjustView,
    CheckInView,
    CheckOutView,
    ProjectPhaseView,
    PublishHoursView,
    SessionDetailView,
    SessionHoursView,
    SessionListView,
    SessionSignupView,
    SignupDetailView,
    SignupTimesView,
)

# Role names may contain slashes, so session routes use the path converter
# and the catch-all detail route comes last.
urlpatterns = [
    path("projects/<str:project_id>/phase", ProjectPhaseView.as_view(), name="project-phase"),
    path("projects/<str:project_id>/sessions", SessionListView.as_view(), name="session-list"),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/hours",
        SessionHoursView.as_view(),
        name="session-hours",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/check-in",
        CheckInView.as_view(),
        name="session-check-in",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/check-out",
        CheckOutView.as_view(),
        name="session-check-out",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/signups/<str:signup_id>/times",
        SignupTimesView.as_view(),
        name="signup-times",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/adjust",
        BulkAdjustView.as_view(),
        name="session-adjust",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/publish",
        PublishHoursView.as_view(),
        name="session-publish",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>/signups",
        SessionSignupView.as_view(),
        name="session-signups",
    ),
    path(
        "projects/<str:project_id>/signups/<str:signup_id>",
        SignupDetailView.as_view(),
        name="signup-detail",
    ),
    path(
        "projects/<str:project_id>/sessions/<path:session_id>",
        SessionDetailView.as_view(),
        name="session-detail",
    ),
]
