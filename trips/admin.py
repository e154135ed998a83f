# admin.py
from django.contrib import admin
from .models import Assignment, SequenceCounter, Trip, TripEvent


class ReadOnlyAdminMixin:
    """
    Solo consulta. Los viajes se guardan por TripService, que valida el cierre
    y recalcula estadías y desenganche; el admin no debe saltarse esas reglas.
    """
    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class AssignmentInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = Assignment
    extra = 0


@admin.register(Trip)
class TripAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("service_order", "client_name", "status", "cargo_type", "invoice_status", "updated_at", "deleted")
    list_filter = ("status", "cargo_type", "invoice_status", "deleted")
    search_fields = ("service_order", "client_name", "bill_of_lading")
    inlines = [AssignmentInline]


@admin.register(TripEvent)
class TripEventAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("assignment", "event_type", "timestamp")
    list_filter = ("event_type",)


@admin.register(SequenceCounter)
class SequenceCounterAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ("name", "value")
