from django.contrib import admin

from volunteering.models import Certificate, Project, Signup


class SignupInline(admin.TabularInline):
    model = Signup
    extra = 0
    fields = ["volunteer_name", "schedule_id", "status", "check_in_time", "check_out_time"]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "event_type", "status", "location", "created_at"]
    list_filter = ["event_type", "status"]
    search_fields = ["title", "location"]
    readonly_fields = ["published"]
    inlines = [SignupInline]


@admin.register(Signup)
class SignupAdmin(admin.ModelAdmin):
    list_display = ["volunteer_name", "project", "schedule_id", "status", "check_in_time"]
    list_filter = ["status", "project"]
    search_fields = ["volunteer_name", "volunteer_email"]


@admin.register(Certificate)
class CertificateAdmin(admin.ModelAdmin):
    list_display = ["volunteer_name", "project_title", "session_key", "issued_at"]
    list_filter = ["is_certified"]
    search_fields = ["volunteer_name", "project_title"]

    def has_change_permission(self, request, obj=None) -> bool:
        return False
