from .billing import (
    bill_data_from_day_bill,
    create_farmer_bill,
    generate_buyer_day_bill,
    generate_farmer_day_bill,
    get_buyer_day_bills,
    get_farmer_day_bills,
)
from .completion import check_and_complete_lot
from .expenses import get_detailed_expenses, get_expenses_summary, record_expense
from .final_accounts import (
    FinalAccountsStrategy,
    LedgerFinalAccounts,
    TradingFinalAccounts,
    generate_final_accounts,
    reconcile_final_accounts,
)
from .fiscal import get_fiscal_year, get_fiscal_year_dates
from .invoicing import create_tax_invoice, generate_tax_invoice
from .rates import DEFAULT_RATES, RateSettings
from .recorder import (
    record_balanced_entries,
    record_expense_transaction,
    record_farmer_bill_transaction,
    record_payment_made,
    record_payment_received,
    record_tax_invoice_transaction,
    record_transaction,
)
from .reports import generate_cess_report, generate_gst_report, generate_tax_report, get_date_range
from .statements import (
    analyze_profitability_by_buyer,
    analyze_profitability_by_farmer,
    calculate_gst_liability,
    generate_balance_sheet,
    generate_cash_flow_report,
    generate_profit_loss_report,
    get_balance_sheet_as_of,
    get_cash_flow_statement,
    get_ledger_entries,
)
from .trading import (
    get_simple_final_accounts,
    get_simple_final_accounts_date_range,
    get_trading_details,
)
