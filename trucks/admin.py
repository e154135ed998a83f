# trucks/admin.py
from django.contrib import admin

from .models import Trailer, Truck


@admin.register(Truck)
class TruckAdmin(admin.ModelAdmin):
    list_display = ("plate", "status", "last_maintenance_date", "deleted")
    list_filter = ("status", "deleted")
    search_fields = ("plate",)


@admin.register(Trailer)
class TrailerAdmin(admin.ModelAdmin):
    list_display = ("plate", "trailer_type", "trailer_size", "deleted")
    list_filter = ("trailer_type", "deleted")
    search_fields = ("plate",)
