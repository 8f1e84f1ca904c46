from volunteering.handlers.views import (
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

__all__ = [
    "BulkAdjustView",
    "CheckInView",
    "CheckOutView",
    "ProjectPhaseView",
    "PublishHoursView",
    "SessionDetailView",
    "SessionHoursView",
    "SessionListView",
    "SessionSignupView",
    "SignupDetailView",
    "SignupTimesView",
]
