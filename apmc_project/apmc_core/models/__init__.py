from .auditlog import AuditLog
from .banking import BankTransaction
from .bills import FarmerBill, TaxInvoice
from .expense import Expense
from .final_accounts import FinalAccounts
from .ledger import LedgerEntry
from .market import Bag, Buyer, Farmer, Lot
from .tenant import Tenant, User
