# customers/admin.py
from django.contrib import admin

from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("razon_social", "nit", "company_size", "flete", "dmti", "deleted")
    list_filter = ("company_size", "deleted")
    search_fields = ("razon_social", "nit", "reference_person")
