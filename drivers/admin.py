# drivers/admin.py
from django.contrib import admin

from .models import Driver


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ("name", "contact", "license_number", "truck_plate", "deleted")
    list_filter = ("deleted",)
    search_fields = ("name", "license_number", "dui_number")
