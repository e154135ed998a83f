from django.urls import path
from . import views

app_name = "reports"

urlpatterns = [
    path("remolques/", views.TrailerOccupancyView.as_view(), name="trailer_occupancy"),
    path("pago-motoristas/", views.DriverPaymentSummaryView.as_view(), name="driver_payments"),
    path("pago-motoristas/<str:driver_id>/", views.DriverPaymentDetailView.as_view(), name="driver_payment_detail"),
    path("rentabilidad/", views.ProfitabilityReportView.as_view(), name="profitability"),
    path("ordenes-trabajo/", views.WorkOrderListView.as_view(), name="work_orders"),
]
