from volunteering.services.attendance_service import AttendanceService
from volunteering.services.publication_service import PublicationService
from volunteering.services.session_service import SessionService
from volunteering.services.signup_service import SignupService

__all__ = ["AttendanceService", "PublicationService", "SessionService", "SignupService"]
