from django.urls import path
from . import views

app_name = "trips"

urlpatterns = [
    path("", views.TripListView.as_view(), name="list"),
    path("<str:pk>/", views.TripDetailView.as_view(), name="detail"),
    path("<str:pk>/eliminar/", views.TripDeleteView.as_view(), name="delete"),
    path("<str:pk>/recuperar/", views.TripRecoverView.as_view(), name="recover"),
    path("<str:pk>/facturar/", views.TripInvoiceView.as_view(), name="invoice"),
]
