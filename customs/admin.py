# customs/admin.py
from django.contrib import admin

from .models import DMTI


@admin.register(DMTI)
class DMTIAdmin(admin.ModelAdmin):
    list_display = ("id", "client_name", "container_number", "registration_date", "user", "starting_customs")
    list_filter = ("user", "registration_date")
    search_fields = ("id", "client_name", "container_number")
