from .actions import recheck_lot_completion, regenerate_final_accounts
from .bills import ExpenseAdmin, FarmerBillAdmin, TaxInvoiceAdmin
from .forms import BagInlineForm, UserAdminChangeForm, UserAdminCreationForm
from .inlines import BagInline
from .ledger import AuditLogAdmin, BankTransactionAdmin, FinalAccountsAdmin, LedgerEntryAdmin
from .market import BagAdmin, BuyerAdmin, FarmerAdmin, LotAdmin
from .mixins import TenantAdminMixin
from .readonly import ReadOnlyAdmin
from .tenant import TenantAdmin, UserAdmin
