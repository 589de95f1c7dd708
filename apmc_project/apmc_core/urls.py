from django.urls import path

from . import views

app_name = "apmc_core"

urlpatterns = [
    # Day bills and invoices
    path("farmer-bills/", views.farmer_day_bills_view, name="farmer-day-bills"),
    path("farmer-bill/<int:farmer_id>/", views.farmer_bill_view, name="farmer-bill"),
    path("buyer-bills/", views.buyer_day_bills_view, name="buyer-day-bills"),
    path("buyer-bill/<int:buyer_id>/", views.buyer_day_bill_view, name="buyer-bill"),
    path("tax-invoice/<int:buyer_id>/", views.tax_invoice_view, name="tax-invoice"),
    # Compliance reports: tax, cess, gst
    path("reports/<str:kind>/", views.report_view, name="report"),
    # Final accounts
    path("accounting/fiscal-year/", views.fiscal_year_view, name="fiscal-year"),
    path("accounting/profit-loss/", views.profit_loss_view, name="profit-loss"),
    path("accounting/balance-sheet/", views.balance_sheet_view, name="balance-sheet"),
    path("accounting/cash-flow/", views.cash_flow_view, name="cash-flow"),
    path("accounting/gst-liability/", views.gst_liability_view, name="gst-liability"),
    path(
        "accounting/profitability/<str:party>/",
        views.profitability_view,
        name="profitability",
    ),
    path("accounting/final-accounts/", views.final_accounts_view, name="final-accounts"),
    path("accounting/reconciliation/", views.reconciliation_view, name="reconciliation"),
    path("accounting/trading-details/", views.trading_details_view, name="trading-details"),
    path("accounting/ledger/", views.ledger_view, name="ledger"),
    path("accounting/expenses/", views.expenses_view, name="expenses"),
    path("accounting/payment-received/", views.payment_received_view, name="payment-received"),
    path("accounting/payment-made/", views.payment_made_view, name="payment-made"),
]
